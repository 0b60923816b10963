"""Reference extraction — parse ``[[wikilinks]]`` out of document text.

Pure functions, no infrastructure dependencies. Consumed by the link index
during rebuild and by ``link_info`` for on-demand recomputation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# [[Target]], [[Target|Alias]], [[Target#Heading]], [[Target#Heading|Alias]].
# The body may not contain "]"; there is no escaping.
_WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass(frozen=True)
class WikiLink:
    """One ``[[...]]`` construct split into its parts."""

    target: str  # reference text, alias and heading removed
    heading: str | None = None
    alias: str | None = None


def _split_body(body: str) -> WikiLink:
    # Alias wins over heading: "#" is only looked for left of the first "|".
    target, bar, alias = body.partition("|")
    target, hash_, heading = target.partition("#")
    return WikiLink(
        target=target.strip(),
        heading=heading.strip() if hash_ else None,
        alias=alias.strip() if bar else None,
    )


def extract_wikilinks(text: str) -> list[WikiLink]:
    """Extract every wikilink construct from *text*, in document order.

    Unlike :func:`parse_references` this keeps duplicates and constructs
    whose target is empty, so callers can inspect aliases and headings.
    """
    return [_split_body(match.group(1)) for match in _WIKILINK_PATTERN.finditer(text)]


def parse_references(text: str) -> list[str]:
    """Extract the ordered, de-duplicated references from *text*.

    ``"[[A]] [[B|alias]] [[C#Heading]] [[A]]"`` gives ``["A", "B", "C"]``.
    Empty references are dropped and duplicates (case-sensitive) keep only
    their first occurrence. Returns an empty list when nothing matches.
    """
    seen: set[str] = set()
    references: list[str] = []
    for link in extract_wikilinks(text):
        if link.target and link.target not in seen:
            seen.add(link.target)
            references.append(link.target)
    return references
