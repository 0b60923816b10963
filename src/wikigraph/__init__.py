"""wikigraph — bidirectional link graph over a tree of wiki-linked documents."""

__version__ = "0.1.0"
