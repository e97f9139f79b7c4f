"""Laplace-smoothed probability estimation for the two-class model.

For a token ``t`` and class ``c`` with ``N_c`` training documents::

    P(t | c) = (count(t, c) + 1) / (N_c + 2)

Each token is a binary present/absent outcome, so add-one smoothing adds two
to the denominator. Every probability lands strictly inside (0, 1), even for
tokens seen in none or all of a class's documents.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .errors import DegeneratePriorError
from .models import TrainedModel

logger = logging.getLogger(__name__)


def reconcile_vocabularies(
    ham_counts: Mapping[str, float],
    spam_counts: Mapping[str, float],
) -> tuple[dict[str, float], dict[str, float]]:
    """Return copies of both count maps extended to their shared vocabulary.

    A token missing from one class gets count 0 there. The inputs are not
    modified.
    """
    vocabulary = set(ham_counts) | set(spam_counts)
    ham = {token: float(ham_counts.get(token, 0.0)) for token in vocabulary}
    spam = {token: float(spam_counts.get(token, 0.0)) for token in vocabulary}
    return ham, spam


def smoothed_probability(count: float, num_docs: int) -> float:
    """Add-one smoothed P(token present | class)."""
    return (count + 1.0) / (num_docs + 2.0)


def estimate(
    ham_counts: Mapping[str, float],
    spam_counts: Mapping[str, float],
    num_ham_docs: int,
    num_spam_docs: int,
) -> TrainedModel:
    """Turn per-class document frequencies into a :class:`TrainedModel`.

    Args:
        ham_counts: Document frequency of each token in the ham corpus.
        spam_counts: Document frequency of each token in the spam corpus.
        num_ham_docs: Number of ham training documents.
        num_spam_docs: Number of spam training documents.

    Returns:
        A new model. Calling this again builds a fresh model and never
        blends with an earlier one.

    Raises:
        DegeneratePriorError: If both document counts are zero.
        ValueError: If a document count is negative or a token count
            exceeds its class's document count.
    """
    if num_ham_docs < 0 or num_spam_docs < 0:
        raise ValueError(
            f"Document counts must be non-negative (ham={num_ham_docs}, spam={num_spam_docs})"
        )
    total_docs = num_ham_docs + num_spam_docs
    if total_docs == 0:
        raise DegeneratePriorError(num_ham_docs, num_spam_docs)

    ham, spam = reconcile_vocabularies(ham_counts, spam_counts)
    for label, counts, n_docs in (("ham", ham, num_ham_docs), ("spam", spam, num_spam_docs)):
        for token, count in counts.items():
            if count < 0 or count > n_docs:
                raise ValueError(
                    f"Count {count} for token {token!r} is outside [0, {n_docs}] in {label}"
                )

    ham_probs = {t: smoothed_probability(c, num_ham_docs) for t, c in ham.items()}
    spam_probs = {t: smoothed_probability(c, num_spam_docs) for t, c in spam.items()}

    prior_spam = num_spam_docs / total_docs
    prior_ham = num_ham_docs / total_docs

    if num_ham_docs == 0 or num_spam_docs == 0:
        logger.warning(
            "Training corpus has no %s documents; that class can never be predicted",
            "ham" if num_ham_docs == 0 else "spam",
        )
    logger.info(
        "Estimated model: %d ham docs, %d spam docs, vocabulary=%d, P(ham)=%.3f, P(spam)=%.3f",
        num_ham_docs, num_spam_docs, len(ham_probs), prior_ham, prior_spam,
    )

    return TrainedModel(
        ham_probs=ham_probs,
        spam_probs=spam_probs,
        prior_ham=prior_ham,
        prior_spam=prior_spam,
        num_ham_docs=num_ham_docs,
        num_spam_docs=num_spam_docs,
    )
