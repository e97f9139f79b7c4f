"""Whitespace tokenizer producing per-document token sets.

Documents are split on any run of whitespace. Tokens are kept exactly as
written: no case folding, no punctuation stripping, no stop words. A ``!``
surrounded by spaces is a token of its own.

By convention every training and test email starts with a ``Subject:``
marker. The tokenizer discards the first whitespace-delimited token of each
document unless ``skip_header`` is turned off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .sources import DocumentLike, as_document

logger = logging.getLogger(__name__)


@dataclass
class Tokenizer:
    """Converts a document into the set of unique tokens it contains.

    Args:
        skip_header: Discard the first whitespace-delimited token of every
            document (the ``Subject:`` marker). Set to ``False`` for
            documents without a leading header token.

    Example::

        tokens = Tokenizer().tokenize_text("Subject: free money , free now")
        sorted(tokens)  # [',', 'free', 'money', 'now']
    """

    skip_header: bool = True

    def tokenize(self, document: DocumentLike) -> frozenset[str]:
        """Return the token set of a document.

        Sources that carry a preset token set (see
        :class:`~spam_filter.sources.TokenSetDocument`) are returned as-is.

        Raises:
            DocumentReadError: If the document cannot be read.
        """
        source = as_document(document)
        preset = source.preset_tokens
        if preset is not None:
            return preset

        tokens = self.tokenize_text(source.read_text())
        logger.debug("Tokenized %s: %d unique tokens", source.name, len(tokens))
        return tokens

    def tokenize_text(self, text: str) -> frozenset[str]:
        """Return the token set of raw text, applying the header policy."""
        words = text.split()
        if self.skip_header:
            words = words[1:]
        return frozenset(words)
