"""Document sources consumed by the tokenizer.

The classifier core never touches the filesystem directly. It pulls text (or a
ready-made token set) from a :class:`DocumentSource`. Files, in-memory strings
and pre-tokenized sets are all supported.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Set
from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Union

from .errors import DocumentReadError

logger = logging.getLogger(__name__)


class DocumentSource(ABC):
    """Abstract base class for documents.

    Subclasses provide a ``name`` used in reports and error messages and
    implement :meth:`read_text`. Sources that already know their tokens
    override :attr:`preset_tokens` so the tokenizer can skip splitting.
    """

    name: str

    @abstractmethod
    def read_text(self) -> str:
        """Return the full document text.

        Raises:
            DocumentReadError: If the document cannot be opened or read.
        """
        ...

    @property
    def preset_tokens(self) -> Optional[frozenset[str]]:
        """Token set supplied directly by the source, or ``None``."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class TextFileDocument(DocumentSource):
    """A plain text file on disk, read once per :meth:`read_text` call."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.name = self.path.name

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise DocumentReadError(str(self.path), "file not found") from exc
        except UnicodeDecodeError as exc:
            raise DocumentReadError(
                str(self.path), f"not valid {self.encoding} text ({exc.reason})"
            ) from exc
        except OSError as exc:
            raise DocumentReadError(str(self.path), exc.strerror or str(exc)) from exc


class InMemoryDocument(DocumentSource):
    """A document held as a string."""

    def __init__(self, name: str, text: str) -> None:
        self.name = name
        self.text = text

    def read_text(self) -> str:
        return self.text


class TokenSetDocument(DocumentSource):
    """A document given directly as its set of tokens.

    The tokenizer uses the tokens as-is, without splitting or the header
    policy.
    """

    def __init__(self, name: str, tokens: Iterable[str]) -> None:
        self.name = name
        self.tokens = frozenset(tokens)

    def read_text(self) -> str:
        return " ".join(sorted(self.tokens))

    @property
    def preset_tokens(self) -> frozenset[str]:
        return self.tokens


DocumentLike = Union[DocumentSource, str, AbstractSet[str]]


def as_document(document: DocumentLike, index: int = 0) -> DocumentSource:
    """Coerce a document-like value into a :class:`DocumentSource`.

    Strings become :class:`InMemoryDocument` and sets become
    :class:`TokenSetDocument`. Generated names use ``index``.

    Raises:
        TypeError: If the value is none of the supported kinds.
    """
    if isinstance(document, DocumentSource):
        return document
    if isinstance(document, str):
        return InMemoryDocument(f"doc-{index}", document)
    if isinstance(document, Set):
        return TokenSetDocument(f"doc-{index}", document)
    raise TypeError(
        f"Expected a DocumentSource, str, or set of tokens, got {type(document).__name__}"
    )


def as_documents(documents: Iterable[DocumentLike]) -> list[DocumentSource]:
    """Coerce every item of ``documents`` with :func:`as_document`."""
    return [as_document(doc, i) for i, doc in enumerate(documents)]


def load_directory(
    path: str | Path,
    pattern: str = "*",
    encoding: str = "utf-8",
) -> list[TextFileDocument]:
    """Return a :class:`TextFileDocument` for each regular file in a directory.

    Files are matched with ``pattern`` (a glob, non-recursive) and sorted by
    name so runs are reproducible. Hidden files are skipped.

    Raises:
        DocumentReadError: If ``path`` does not exist or is not a directory.
    """
    directory = Path(path)
    if not directory.exists():
        raise DocumentReadError(str(directory), "directory not found")
    if not directory.is_dir():
        raise DocumentReadError(str(directory), "not a directory")

    files = sorted(
        p for p in directory.glob(pattern)
        if p.is_file() and not p.name.startswith(".")
    )
    logger.debug("Found %d documents in %s", len(files), directory)
    return [TextFileDocument(p, encoding=encoding) for p in files]

