"""Evaluation metrics for ham/spam predictions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

CLASSES = ("ham", "spam")


@dataclass
class EvaluationMetrics:
    """Evaluation metrics for a labeled test set.

    Attributes:
        accuracy: Fraction of correct predictions.
        per_class: Precision, recall and F1 for each class.
        confusion_matrix: ``{true_label: {predicted_label: count}}``.
        support: Number of true examples per class.
    """

    accuracy: float = 0.0
    per_class: dict[str, dict[str, float]] = field(default_factory=dict)
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.support.values())

    @property
    def false_positives(self) -> int:
        """Ham documents wrongly labeled spam."""
        return self.confusion_matrix.get("ham", {}).get("spam", 0)

    @property
    def false_negatives(self) -> int:
        """Spam documents that slipped through as ham."""
        return self.confusion_matrix.get("spam", {}).get("ham", 0)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "per_class": {
                cls: {k: round(v, 4) for k, v in metrics.items()}
                for cls, metrics in self.per_class.items()
            },
            "confusion_matrix": self.confusion_matrix,
            "support": self.support,
        }

    def summary(self) -> str:
        """Human-readable summary of metrics."""
        lines = [
            f"Accuracy: {self.accuracy:.2%}",
            "",
            f"{'Class':<10} {'Precision':>10} {'Recall':>10} {'F1':>10} {'Support':>10}",
            "-" * 54,
        ]
        for cls in sorted(self.per_class):
            m = self.per_class[cls]
            s = self.support.get(cls, 0)
            lines.append(
                f"{cls:<10} {m['precision']:>10.4f} {m['recall']:>10.4f} "
                f"{m['f1']:>10.4f} {s:>10}"
            )
        return "\n".join(lines)


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


def compute_metrics(y_true: Sequence[str], y_pred: Sequence[str]) -> EvaluationMetrics:
    """Score predicted labels against the true ones.

    ``ham`` and ``spam`` are always reported, so a test set with no spam
    still yields a spam row of zeros.

    Raises:
        ValueError: If the sequences differ in length.
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    labels = sorted(set(CLASSES).union(y_true, y_pred))
    pairs = Counter(zip(y_true, y_pred))
    confusion = {t: {p: pairs[(t, p)] for p in labels} for t in labels}

    support = {label: sum(confusion[label].values()) for label in labels}
    predicted = {label: sum(confusion[t][label] for t in labels) for label in labels}

    per_class: dict[str, dict[str, float]] = {}
    for label in labels:
        hits = confusion[label][label]
        precision = _ratio(hits, predicted[label])
        recall = _ratio(hits, support[label])
        # Harmonic mean of precision and recall, written in terms of counts
        f1 = _ratio(2 * hits, predicted[label] + support[label])
        per_class[label] = {"precision": precision, "recall": recall, "f1": f1}

    correct = sum(confusion[label][label] for label in labels)
    return EvaluationMetrics(
        accuracy=_ratio(correct, len(y_true)),
        per_class=per_class,
        confusion_matrix=confusion,
        support=support,
    )
