"""Document-frequency counting over a single-class corpus."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Optional

from .sources import DocumentLike, as_document
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def count_document_frequencies(
    documents: Iterable[DocumentLike],
    tokenizer: Optional[Tokenizer] = None,
) -> dict[str, float]:
    """Count, for each token, the number of documents it appears in.

    A token repeated inside one document still adds exactly 1 for that
    document: this is document frequency, not term frequency. Counts are
    floats for the probability arithmetic downstream.

    Args:
        documents: Documents of one class.
        tokenizer: Tokenizer to use (default: ``Tokenizer()``).

    Returns:
        Mapping of every token seen in at least one document to its count.

    Raises:
        DocumentReadError: If any document cannot be read. Counting stops
            at the first failure; no partial result is returned.
    """
    tokenizer = tokenizer or Tokenizer()
    counts: dict[str, float] = defaultdict(float)
    n_docs = 0
    for i, doc in enumerate(documents):
        for token in tokenizer.tokenize(as_document(doc, i)):
            counts[token] += 1.0
        n_docs += 1

    logger.debug("Counted %d distinct tokens across %d documents", len(counts), n_docs)
    return dict(counts)


def merge_counts(*partials: Mapping[str, float]) -> dict[str, float]:
    """Sum several partial count maps into one.

    Useful when documents are counted in separate chunks. Addition is
    commutative, so the merge order does not affect the result.
    """
    merged: dict[str, float] = defaultdict(float)
    for partial in partials:
        for token, count in partial.items():
            merged[token] += count
    return dict(merged)
