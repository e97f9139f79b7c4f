"""Data models for ham/spam classification."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

MODEL_FORMAT_VERSION = "1.0"


class Label(str, Enum):
    """The two document classes."""

    HAM = "ham"
    SPAM = "spam"

    def __str__(self) -> str:
        return self.value


def _freeze(probs: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(probs))


@dataclass(frozen=True)
class TrainedModel:
    """Immutable result of training: per-class token probabilities and priors.

    ``ham_probs`` and ``spam_probs`` map every token seen during training to
    P(token present | class). Both maps always share the same key set.

    Attributes:
        ham_probs: Smoothed P(token | ham) for each vocabulary token.
        spam_probs: Smoothed P(token | spam) for each vocabulary token.
        prior_ham: Fraction of training documents labeled ham.
        prior_spam: Fraction of training documents labeled spam.
        num_ham_docs: Number of ham training documents.
        num_spam_docs: Number of spam training documents.
    """

    ham_probs: Mapping[str, float]
    spam_probs: Mapping[str, float]
    prior_ham: float
    prior_spam: float
    num_ham_docs: int = 0
    num_spam_docs: int = 0

    def __post_init__(self) -> None:
        if set(self.ham_probs) != set(self.spam_probs):
            raise ValueError("ham_probs and spam_probs must share the same vocabulary")
        for name, probs in (("ham", self.ham_probs), ("spam", self.spam_probs)):
            for token, prob in probs.items():
                if not 0.0 < prob < 1.0:
                    raise ValueError(
                        f"P({token!r} | {name}) = {prob} is outside the open interval (0, 1)"
                    )
        if not math.isclose(self.prior_ham + self.prior_spam, 1.0, abs_tol=1e-9):
            raise ValueError(
                f"Priors must sum to 1.0, got {self.prior_ham} + {self.prior_spam}"
            )
        # Read-only views so the trained state cannot be mutated in place
        object.__setattr__(self, "ham_probs", _freeze(self.ham_probs))
        object.__setattr__(self, "spam_probs", _freeze(self.spam_probs))

    def __hash__(self) -> int:
        return hash((
            frozenset(self.ham_probs.items()),
            frozenset(self.spam_probs.items()),
            self.prior_ham,
            self.prior_spam,
            self.num_ham_docs,
            self.num_spam_docs,
        ))

    @property
    def vocabulary(self) -> frozenset[str]:
        """All tokens seen in either class during training."""
        return frozenset(self.ham_probs)

    @property
    def vocabulary_size(self) -> int:
        return len(self.ham_probs)

    def probs_for(self, label: Label) -> Mapping[str, float]:
        return self.spam_probs if label is Label.SPAM else self.ham_probs

    def prior_for(self, label: Label) -> float:
        return self.prior_spam if label is Label.SPAM else self.prior_ham

    def to_dict(self) -> dict:
        """Serialize the model to plain JSON-compatible data."""
        return {
            "version": MODEL_FORMAT_VERSION,
            "prior_ham": self.prior_ham,
            "prior_spam": self.prior_spam,
            "num_ham_docs": self.num_ham_docs,
            "num_spam_docs": self.num_spam_docs,
            "ham_probs": dict(sorted(self.ham_probs.items())),
            "spam_probs": dict(sorted(self.spam_probs.items())),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrainedModel":
        """Deserialize a model, re-checking its invariants.

        Raises:
            ValueError: If required keys are missing, the version is unknown,
                or the stored probabilities violate the model invariants.
        """
        version = data.get("version")
        if version != MODEL_FORMAT_VERSION:
            raise ValueError(f"Unsupported model format version: {version!r}")
        try:
            return cls(
                ham_probs={str(k): float(v) for k, v in data["ham_probs"].items()},
                spam_probs={str(k): float(v) for k, v in data["spam_probs"].items()},
                prior_ham=float(data["prior_ham"]),
                prior_spam=float(data["prior_spam"]),
                num_ham_docs=int(data.get("num_ham_docs", 0)),
                num_spam_docs=int(data.get("num_spam_docs", 0)),
            )
        except KeyError as exc:
            raise ValueError(f"Model data is missing required key {exc}") from exc
        except (AttributeError, TypeError) as exc:
            raise ValueError(f"Model data is malformed: {exc}") from exc


def save_model(model: TrainedModel, path: str | Path) -> None:
    """Write a trained model to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(model.to_dict(), f, indent=2)


def load_model(path: str | Path) -> TrainedModel:
    """Read a trained model previously written by :func:`save_model`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or not a valid model.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Model file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Model file {path} does not contain a JSON object")
    return TrainedModel.from_dict(data)


@dataclass
class ClassificationResult:
    """Label assigned to one document, with the log-space scores behind it.

    Unpacks as a ``(name, label)`` pair::

        for name, label in results:
            print(name, label)
    """

    name: str
    label: Label
    log_ham: float = 0.0
    log_spam: float = 0.0

    @property
    def is_spam(self) -> bool:
        return self.label is Label.SPAM

    @property
    def margin(self) -> float:
        """``log_spam - log_ham``; positive means the document leans spam."""
        return self.log_spam - self.log_ham

    def __iter__(self) -> Iterator:
        yield self.name
        yield self.label

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label.value,
            "log_ham": round(self.log_ham, 6),
            "log_spam": round(self.log_spam, 6),
        }
