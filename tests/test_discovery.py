"""Tests for schema document discovery."""
import pytest

from gqlcompose.discovery import DocumentWalker, discover_documents, is_schema_file
from gqlcompose.exceptions import DiscoveryError, EmptyCorpusError


class TestIsSchemaFile:
    """File name filtering."""

    @pytest.mark.parametrize("filename", [
        "schema.graphql", "schema.gql", "UPPER.GRAPHQL", "Mixed.GqL",
    ])
    def test_schema_suffixes(self, filename):
        assert is_schema_file(filename)

    @pytest.mark.parametrize("filename", [
        "schema.graphqls", "schema.json", "graphql", "notes.txt", "schema.graphql.bak",
    ])
    def test_other_files(self, filename):
        assert not is_schema_file(filename)

    def test_custom_extensions(self):
        assert is_schema_file("schema.graphqls", [".graphqls"])


class TestDocumentWalker:
    """Walking and reading the source tree."""

    def test_recursive_sorted_relative_names(self, write_tree):
        source = write_tree({
            "z.graphql": "type Z { id: ID }",
            "nested/deeper/b.gql": "type B { id: ID }",
            "nested/a.graphql": "type A { id: ID }",
            "README.md": "# not a schema",
        })

        sources = DocumentWalker(source).read_all()

        assert [s.name for s in sources] == [
            "nested/a.graphql",
            "nested/deeper/b.gql",
            "z.graphql",
        ]
        assert sources[0].body == "type A { id: ID }"

    def test_excluded_output_file(self, write_tree):
        source = write_tree({
            "a.graphql": "type Query { a: String }",
            "build/out.graphql": "type Query { stale: String }",
        })

        walker = DocumentWalker(source, exclude=[source / "build" / "out.graphql"])

        assert [s.name for s in walker.read_all()] == ["a.graphql"]

    def test_single_worker(self, write_tree):
        source = write_tree({f"doc{i}.graphql": f"type T{i} {{ id: ID }}" for i in range(5)})

        sources = DocumentWalker(source, max_workers=1).read_all()

        assert len(sources) == 5

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DiscoveryError) as excinfo:
            DocumentWalker(tmp_path / "missing").read_all()

        assert excinfo.value.path == str(tmp_path / "missing")

    def test_empty_corpus(self, write_tree):
        source = write_tree({"notes.txt": "nothing here"})

        with pytest.raises(EmptyCorpusError):
            DocumentWalker(source).read_all()

    def test_undecodable_file(self, write_tree):
        source = write_tree({"ok.graphql": "type A { id: ID }"})
        (source / "bad.graphql").write_bytes(b"type B { id: ID } \xff\xfe")

        with pytest.raises(DiscoveryError) as excinfo:
            DocumentWalker(source).read_all()

        assert excinfo.value.path.endswith("bad.graphql")


class TestDiscoverDocuments:
    """Config-driven discovery."""

    def test_uses_configured_extensions(self, write_tree, config):
        source = write_tree({
            "a.graphql": "type A { id: ID }",
            "b.graphqls": "type B { id: ID }",
        })
        config["discovery"]["extensions"] = [".graphqls"]

        assert [s.name for s in discover_documents(source, config)] == ["b.graphqls"]
