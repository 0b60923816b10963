"""Tests for two-tier reference resolution."""

from __future__ import annotations

from pathlib import Path

from tests.conftest import write_doc
from wikigraph.domain.models import Resolution
from wikigraph.infrastructure.filesystem import FileSystemStore
from wikigraph.infrastructure.resolver import ReferenceResolver


def _resolver(root: Path | None, **kwargs: str) -> ReferenceResolver:
    return ReferenceResolver(FileSystemStore(root), **kwargs)


class TestDirectMatch:
    def test_reference_without_extension(self, vault_root: Path) -> None:
        write_doc(vault_root, "Note.md")
        assert _resolver(vault_root).resolve("Note") == Resolution("Note.md", True)

    def test_reference_with_extension(self, vault_root: Path) -> None:
        write_doc(vault_root, "Note.md")
        assert _resolver(vault_root).resolve("Note.md") == Resolution("Note.md", True)

    def test_path_reference(self, vault_root: Path) -> None:
        write_doc(vault_root, "projects/Roadmap.md")
        resolution = _resolver(vault_root).resolve("projects/Roadmap")
        assert resolution == Resolution("projects/Roadmap.md", True)

    def test_direct_match_wins_over_name_search(self, vault_root: Path) -> None:
        write_doc(vault_root, "a/Dup.md")
        write_doc(vault_root, "Dup.md")
        assert _resolver(vault_root).resolve("Dup").path == "Dup.md"

    def test_self_reference(self, vault_root: Path) -> None:
        write_doc(vault_root, "Self.md", "I link to [[Self]]")
        assert _resolver(vault_root).resolve("Self") == Resolution("Self.md", True)

    def test_custom_extension(self, vault_root: Path) -> None:
        write_doc(vault_root, "Note.txt")
        resolver = _resolver(vault_root, extension=".txt")
        assert resolver.extension == ".txt"
        assert resolver.resolve("Note") == Resolution("Note.txt", True)


class TestNameSearch:
    def test_nested_document_found_by_name(self, vault_root: Path) -> None:
        write_doc(vault_root, "deep/er/Target.md")
        resolution = _resolver(vault_root).resolve("Target")
        assert resolution == Resolution("deep/er/Target.md", True)

    def test_name_with_spaces(self, vault_root: Path) -> None:
        write_doc(vault_root, "notes/My Long Note.md")
        assert _resolver(vault_root).resolve("My Long Note").path == "notes/My Long Note.md"

    def test_first_hit_in_lexical_order(self, vault_root: Path) -> None:
        write_doc(vault_root, "b/Dup.md")
        write_doc(vault_root, "a/Dup.md")
        assert _resolver(vault_root).resolve("Dup").path == "a/Dup.md"

    def test_name_match_is_case_sensitive(self, vault_root: Path) -> None:
        write_doc(vault_root, "sub/Note.md")
        assert _resolver(vault_root).resolve("note").found is False

    def test_hidden_directories_not_searched(self, vault_root: Path) -> None:
        write_doc(vault_root, ".trash/Gone.md")
        write_doc(vault_root, "sub/.Hidden.md")
        resolver = _resolver(vault_root)
        assert resolver.resolve("Gone").found is False
        assert resolver.resolve(".Hidden").found is False

    def test_non_document_file_matches_full_name(self, vault_root: Path) -> None:
        write_doc(vault_root, "assets/diagram.png")
        assert _resolver(vault_root).resolve("diagram.png").path == "assets/diagram.png"


class TestNotFound:
    def test_missing_reference(self, vault_root: Path) -> None:
        write_doc(vault_root, "Other.md")
        assert _resolver(vault_root).resolve("Missing") == Resolution.missing()

    def test_no_vault(self) -> None:
        assert _resolver(None).resolve("Anything") == Resolution("", False)

    def test_missing_root_is_not_an_error(self, tmp_path: Path) -> None:
        assert _resolver(tmp_path / "absent").resolve("Note").found is False


class TestNameIndex:
    def test_first_hit_wins(self, vault_root: Path) -> None:
        write_doc(vault_root, "a/Dup.md")
        write_doc(vault_root, "b/Dup.md")
        write_doc(vault_root, "Top.md")
        names = _resolver(vault_root).build_name_index()
        assert names == {"Dup": "a/Dup.md", "Top": "Top.md"}

    def test_from_given_ids(self, vault_root: Path) -> None:
        names = _resolver(vault_root).build_name_index(["x/One.md", "y/One.md", "Two.md"])
        assert names == {"One": "x/One.md", "Two": "Two.md"}

    def test_lookup_agrees_with_walk(self, vault_root: Path) -> None:
        for doc_id in ("Root.md", "n/Nested.md", "m/Nested.md", ".hid/Secret.md"):
            write_doc(vault_root, doc_id)
        resolver = _resolver(vault_root)
        names = resolver.build_name_index()
        for reference in ("Root", "Nested", "Secret", "Missing", "Root.md"):
            assert resolver.resolve(reference, names=names) == resolver.resolve(reference)

    def test_direct_tier_still_used_with_empty_map(self, vault_root: Path) -> None:
        write_doc(vault_root, "Note.md")
        write_doc(vault_root, "sub/Deep.md")
        resolver = _resolver(vault_root)
        assert resolver.resolve("Note", names={}).found is True
        assert resolver.resolve("Deep", names={}).found is False
