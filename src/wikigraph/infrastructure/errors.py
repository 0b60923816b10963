"""Exception hierarchy for the indexing engine.

Only caller-visible failures are exceptions. A reference that does not
resolve is a normal outcome and is reported as ``found=False`` instead.
"""

from __future__ import annotations


class WikigraphError(Exception):
    """Base class for all wikigraph errors."""


class DocumentReadError(WikigraphError):
    """A document could not be read through the document store."""

    def __init__(self, doc_id: str, reason: str) -> None:
        super().__init__(f"Cannot read document {doc_id!r}: {reason}")
        self.doc_id = doc_id
        self.reason = reason


class IndexRebuildError(WikigraphError):
    """The collection root itself could not be walked."""

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"Cannot walk vault root {root!r}: {reason}")
        self.root = root
        self.reason = reason
