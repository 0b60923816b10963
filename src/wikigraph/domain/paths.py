"""Naming rules for document identities.

A DocumentID is a collection-relative POSIX path such as
``projects/Roadmap.md``. Equality is exact-string: no case folding and no
Unicode normalization happen anywhere in this module.
"""

from __future__ import annotations

from posixpath import basename, splitext

DEFAULT_EXTENSION = ".md"


def strip_extension(name: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Remove a trailing *extension* from *name* if present (case-sensitive)."""
    if extension and name.endswith(extension):
        return name[: -len(extension)]
    return name


def with_extension(reference: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Append *extension* unless *reference* already ends with it."""
    if reference.endswith(extension):
        return reference
    return reference + extension


def base_name(doc_id: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Display name of a document: last path segment without the extension.

    Examples:
        >>> base_name("projects/Roadmap.md")
        'Roadmap'
        >>> base_name("image.png")
        'image.png'
    """
    return strip_extension(basename(doc_id), extension)


def join_id(parent: str, name: str) -> str:
    """Join a directory id and an entry name into a child id."""
    return f"{parent}/{name}" if parent else name


def is_hidden(name: str) -> bool:
    """Hidden entries start with a dot (``.git``, ``.obsidian``, ``.draft.md``)."""
    return name.startswith(".")


def is_primary_document(doc_id: str, extension: str = DEFAULT_EXTENSION) -> bool:
    """Whether *doc_id* is a text document eligible for the graph.

    Extension-less identities are eligible; everything else must carry the
    primary extension (compared case-insensitively).
    """
    suffix = splitext(basename(doc_id))[1]
    if not suffix:
        return True
    return suffix.lower() == extension.lower()
