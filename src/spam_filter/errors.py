"""Exception hierarchy for the spam filter.

All library errors derive from :class:`SpamFilterError` so callers (the CLI in
particular) can catch them at a single boundary.
"""

from __future__ import annotations

from typing import Optional


class SpamFilterError(Exception):
    """Base class for all spam filter errors."""


class DocumentReadError(SpamFilterError, OSError):
    """A document source could not be opened or read.

    Attributes:
        document: Name of the offending document (file name or source id).
    """

    def __init__(self, document: str, reason: Optional[str] = None) -> None:
        self.document = document
        self.reason = reason
        message = f"Cannot read document '{document}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class DegeneratePriorError(SpamFilterError, ValueError):
    """The training corpus holds no documents, so class priors are undefined."""

    def __init__(self, num_ham_docs: int = 0, num_spam_docs: int = 0) -> None:
        self.num_ham_docs = num_ham_docs
        self.num_spam_docs = num_spam_docs
        super().__init__(
            "Cannot estimate class priors from an empty training corpus "
            f"(ham={num_ham_docs}, spam={num_spam_docs})"
        )
