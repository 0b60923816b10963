"""ReferenceResolver — map a reference to a concrete document id.

Two tiers, short-circuiting on the first hit:

1. Direct match: ``reference`` (plus the default extension unless already
   present) exists as a document.
2. Name search: a non-hidden file anywhere in the collection whose name,
   with the extension stripped, equals ``reference`` exactly.

Name search either walks the collection and stops at the first hit, or
consults a precomputed :func:`build_name_index` map so a bulk pass (rebuild,
graph projection) walks the tree once instead of once per reference.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from posixpath import basename

from wikigraph.domain.models import Resolution
from wikigraph.domain.paths import DEFAULT_EXTENSION, strip_extension, with_extension
from wikigraph.infrastructure.filesystem import DocumentStore, walk_documents

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolves references against a :class:`DocumentStore`."""

    def __init__(self, store: DocumentStore, *, extension: str = DEFAULT_EXTENSION) -> None:
        self._store = store
        self._extension = extension

    @property
    def extension(self) -> str:
        return self._extension

    def resolve(self, reference: str, *, names: Mapping[str, str] | None = None) -> Resolution:
        """Resolve *reference*; ``found=False`` when nothing matches.

        Args:
            reference: Raw reference text from a ``[[...]]`` construct.
            names: Optional map from :meth:`build_name_index`. When given,
                step 2 is a dict lookup instead of a collection walk.
        """
        candidate = with_extension(reference, self._extension)
        if self._store.exists(candidate):
            return Resolution(path=candidate, found=True)

        if names is not None:
            found = names.get(reference)
        else:
            found = self._search_by_name(reference)
        if found is None:
            return Resolution.missing()
        return Resolution(path=found, found=True)

    def _search_by_name(self, reference: str) -> str | None:
        try:
            for doc_id in walk_documents(self._store):
                if strip_extension(basename(doc_id), self._extension) == reference:
                    return doc_id
        except OSError as exc:
            logger.debug("Name search for %r aborted: %s", reference, exc)
        return None

    def build_name_index(self, doc_ids: Iterable[str] | None = None) -> dict[str, str]:
        """Map each stripped file name to the first document carrying it.

        Uses the same walk and first-hit-wins rule as the per-reference
        search. Pass *doc_ids* (in walk order) to reuse a walk the caller
        already made. Raises :class:`OSError` if the root cannot be listed.
        """
        if doc_ids is None:
            doc_ids = walk_documents(self._store)
        names: dict[str, str] = {}
        for doc_id in doc_ids:
            names.setdefault(strip_extension(basename(doc_id), self._extension), doc_id)
        return names
