"""Presence-only Naive Bayes ham/spam classifier.

Training counts, for each class, how many documents contain each token, then
smooths those counts into P(token | class) (see :mod:`spam_filter.estimator`).
Classification sums log-probabilities so long documents do not underflow::

    log_spam = ln P(spam) + sum(ln P(t | spam) for t in tokens if t in vocabulary)
    log_ham  = ln P(ham)  + sum(ln P(t | ham)  for t in tokens if t in vocabulary)

The document is spam when ``log_spam > log_ham``. Ties go to ham.

Only tokens *present* in the document contribute evidence. Vocabulary tokens
absent from the document add nothing to either score, and tokens never seen
in training are skipped. This is a deliberate simplification of the full
Bernoulli model, which would also add ``ln(1 - P(t | c))`` for every absent
token.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import AbstractSet, Iterable, Optional

from .errors import DocumentReadError
from .estimator import estimate
from .evaluation import EvaluationMetrics, compute_metrics
from .models import ClassificationResult, Label, TrainedModel, load_model, save_model
from .sources import DocumentLike, as_documents
from .tokenizer import Tokenizer
from .vocabulary import count_document_frequencies

logger = logging.getLogger(__name__)


def _log(p: float) -> float:
    # A zero prior means the class had no training documents
    return math.log(p) if p > 0 else -math.inf


def score(tokens: AbstractSet[str], model: TrainedModel) -> tuple[float, float]:
    """Compute the unnormalized log posteriors ``(log_ham, log_spam)``."""
    log_ham = _log(model.prior_ham)
    log_spam = _log(model.prior_spam)
    ham_probs = model.ham_probs
    spam_probs = model.spam_probs

    for token in tokens:
        if token in spam_probs and token in ham_probs:
            log_spam += math.log(spam_probs[token])
            log_ham += math.log(ham_probs[token])

    return log_ham, log_spam


def decide(log_ham: float, log_spam: float) -> Label:
    """Spam only on a strictly greater spam score."""
    return Label.SPAM if log_spam > log_ham else Label.HAM


def classify_tokens(tokens: AbstractSet[str], model: TrainedModel) -> Label:
    """Label a single token set."""
    return decide(*score(tokens, model))


def train(
    ham_documents: Iterable[DocumentLike],
    spam_documents: Iterable[DocumentLike],
    tokenizer: Optional[Tokenizer] = None,
) -> TrainedModel:
    """Train a model from labeled documents.

    Args:
        ham_documents: Legitimate documents.
        spam_documents: Spam documents.
        tokenizer: Tokenizer to apply (default: ``Tokenizer()``).

    Returns:
        A new immutable :class:`TrainedModel`.

    Raises:
        DegeneratePriorError: If both collections are empty.
        DocumentReadError: If any document cannot be read. Training aborts
            and no model is produced.
    """
    tokenizer = tokenizer or Tokenizer()
    hams = as_documents(ham_documents)
    spams = as_documents(spam_documents)

    logger.info("Training on %d ham and %d spam documents", len(hams), len(spams))
    ham_counts = count_document_frequencies(hams, tokenizer)
    spam_counts = count_document_frequencies(spams, tokenizer)
    return estimate(ham_counts, spam_counts, len(hams), len(spams))


def classify(
    documents: Iterable[DocumentLike],
    model: TrainedModel,
    tokenizer: Optional[Tokenizer] = None,
) -> list[ClassificationResult]:
    """Classify each document independently, preserving input order.

    Raises:
        DocumentReadError: If any document cannot be read. The whole batch
            is aborted.
    """
    tokenizer = tokenizer or Tokenizer()
    results: list[ClassificationResult] = []
    for doc in as_documents(documents):
        tokens = tokenizer.tokenize(doc)
        log_ham, log_spam = score(tokens, model)
        label = decide(log_ham, log_spam)
        logger.debug("%s -> %s (log_ham=%.4f, log_spam=%.4f)", doc.name, label, log_ham, log_spam)
        results.append(ClassificationResult(
            name=doc.name,
            label=label,
            log_ham=log_ham,
            log_spam=log_spam,
        ))
    return results


class NaiveBayesClassifier:
    """High-level train/classify pipeline with model persistence.

    Example::

        classifier = NaiveBayesClassifier()
        classifier.train(load_directory("data/ham"), load_directory("data/spam"))

        for name, label in classifier.classify(load_directory("data/test")):
            print(name, label)

        classifier.save("model.json")
        loaded = NaiveBayesClassifier.load("model.json")

    Args:
        tokenizer: Tokenizer shared by training and classification.
        model: An already trained model (e.g. loaded from disk).
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        model: Optional[TrainedModel] = None,
    ) -> None:
        self.tokenizer = tokenizer or Tokenizer()
        self._model = model

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> TrainedModel:
        """The current trained model.

        Raises:
            RuntimeError: If the classifier has not been trained.
        """
        if self._model is None:
            raise RuntimeError("Classifier not trained. Call train() first.")
        return self._model

    def train(
        self,
        ham_documents: Iterable[DocumentLike],
        spam_documents: Iterable[DocumentLike],
    ) -> TrainedModel:
        """Train from scratch, replacing any previous model wholesale."""
        self._model = train(ham_documents, spam_documents, self.tokenizer)
        return self._model

    def classify(self, documents: Iterable[DocumentLike]) -> list[ClassificationResult]:
        """Classify a batch of documents in input order."""
        return classify(documents, self.model, self.tokenizer)

    def classify_one(self, document: DocumentLike) -> ClassificationResult:
        """Classify a single document."""
        return self.classify([document])[0]

    def evaluate(
        self,
        ham_documents: Iterable[DocumentLike],
        spam_documents: Iterable[DocumentLike],
    ) -> EvaluationMetrics:
        """Classify labeled documents and score the predictions.

        Raises:
            RuntimeError: If the classifier has not been trained.
            DocumentReadError: If any document cannot be read.
        """
        hams = as_documents(ham_documents)
        spams = as_documents(spam_documents)
        predictions = self.classify(hams + spams)
        y_true = [Label.HAM.value] * len(hams) + [Label.SPAM.value] * len(spams)
        y_pred = [r.label.value for r in predictions]
        return compute_metrics(y_true, y_pred)

    def save(self, path: str | Path) -> None:
        """Save the trained model to a JSON file.

        Raises:
            RuntimeError: If the classifier has not been trained.
        """
        if self._model is None:
            raise RuntimeError("Cannot save untrained classifier.")
        save_model(self._model, path)
        logger.info("Saved model to %s", path)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[Tokenizer] = None) -> "NaiveBayesClassifier":
        """Load a classifier from a JSON model file.

        Raises:
            DocumentReadError: If the model file cannot be read.
            ValueError: If the file is not a valid model.
        """
        try:
            model = load_model(path)
        except OSError as exc:
            raise DocumentReadError(str(path), exc.strerror or str(exc)) from exc
        return cls(tokenizer=tokenizer, model=model)
