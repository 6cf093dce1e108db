"""End-to-end tests for one build pass."""
import pytest
from graphql import lexicographic_sort_schema, print_schema

from gqlcompose.discovery import SourceDocument, discover_documents
from gqlcompose.documents import parse_documents
from gqlcompose.exceptions import AssemblyError, CycleError, SchemaValidationError
from gqlcompose.graph import build_dependency_graph
from gqlcompose.pipeline import build, compose, run_build


@pytest.fixture
def output(tmp_path):
    """Destination outside the source tree, in a directory that does not exist yet."""
    return tmp_path / "build" / "nested" / "schema.graphql"


class TestScenarios:
    """The reference scenarios for ordering and failure handling."""

    def test_extension_after_base(self, write_tree, output, config):
        source = write_tree({
            "base.graphql": "type Query { ping: String }",
            "ext.graphql": "extend type Query { pong: String }",
        })

        result = build(source, output, config)

        assert result.success
        assert result.order == ["base.graphql", "ext.graphql"]
        text = output.read_text(encoding="utf-8")
        assert "ping: String" in text
        assert "pong: String" in text

    def test_self_referencing_directive(self, write_tree, output, config):
        source = write_tree({
            "a.graphql": '''
directive @foo on FIELD_DEFINITION
type Query { value: String @foo }
''',
            "b.graphql": "type Extra { id: ID }",
        })

        result = build(source, output, config)

        assert result.success
        assert result.order == ["a.graphql", "b.graphql"]

    def test_directive_declared_in_two_documents(self, write_tree, output, config):
        source = write_tree({
            "a.graphql": "directive @foo on FIELD_DEFINITION\ntype Query { value: String @foo }",
            "b.graphql": "directive @foo on FIELD_DEFINITION",
        })

        graph = build_dependency_graph(parse_documents(discover_documents(source, config)))
        assert graph.edges() == []

        result = run_build(source, output, config)

        assert not result.success
        assert isinstance(result.error, AssemblyError)
        assert result.error.document == "b.graphql"
        assert "@foo" in result.messages[0]
        assert not output.exists()

    def test_cycle_fails_and_writes_nothing(self, write_tree, output, config):
        source = write_tree({
            "x.graphql": "type X { id: ID }\nextend type Y { x: X }",
            "y.graphql": "type Y { id: ID }\nextend type X { y: Y }",
        })

        with pytest.raises(CycleError) as excinfo:
            build(source, output, config)

        assert excinfo.value.documents == ["x.graphql", "y.graphql"]
        assert not output.exists()

    def test_missing_type_fails_and_writes_nothing(self, write_tree, output, config):
        source = write_tree({"query.graphql": "type Query { thing: Missing }"})

        with pytest.raises(AssemblyError) as excinfo:
            build(source, output, config)

        assert "Missing" in str(excinfo.value)
        assert not output.exists()


class TestBuild:
    """Output handling and result reporting."""

    def test_validation_failure_keeps_existing_output(self, write_tree, output, config):
        source = write_tree({"types.graphql": "type User { id: ID }"})
        output.parent.mkdir(parents=True)
        output.write_text("previous", encoding="utf-8")

        result = run_build(source, output, config)

        assert not result.success
        assert isinstance(result.error, SchemaValidationError)
        assert any("Query root type" in m for m in result.messages)
        assert output.read_text(encoding="utf-8") == "previous"

    def test_output_inside_source_is_ignored(self, write_tree, config):
        source = write_tree({"base.graphql": "type Query { ping: String }"})
        output = source / "dist" / "schema.graphql"

        first = build(source, output, config)
        second = build(source, output, config)

        assert first.order == second.order == ["base.graphql"]

    def test_repeated_builds_are_byte_identical(self, write_tree, tmp_path, config):
        source = write_tree({
            "query.graphql": "type Query { me: User, search(term: String!): [SearchResult!]! }",
            "user.graphql": "type User implements Node { id: ID!, role: Role }",
            "node.graphql": "interface Node { id: ID! }",
            "role.graphql": "enum Role { ADMIN @internal USER }",
            "directives.graphql": "directive @internal on ENUM_VALUE",
            "search.graphql": "union SearchResult = User",
            "extensions/user_posts.graphql": "extend type User { posts: [String!] }",
        })

        first = build(source, tmp_path / "one.graphql", config)
        second = build(source, tmp_path / "two.graphql", config)

        assert first.success and second.success
        assert first.order == second.order
        assert (tmp_path / "one.graphql").read_bytes() == (tmp_path / "two.graphql").read_bytes()

    def test_result_summary(self, write_tree, output, config):
        source = write_tree({
            "user.graphql": "type User { id: ID! }",
            "query.graphql": "type Query { me: User }",
        })

        result = build(source, output, config)

        assert result.output_path == output
        assert result.order == ["user.graphql", "query.graphql"]
        assert result.type_count >= 2
        assert result.messages == []

    def test_run_build_reports_failure(self, tmp_path, output, config):
        result = run_build(tmp_path / "missing", output, config)

        assert not result.success
        assert result.order == []
        assert result.messages and "missing" in result.messages[0]


class TestCompose:
    """The computational stages without file I/O."""

    def test_round_trip(self):
        composed = compose([
            SourceDocument("directives.graphql", "directive @auth(role: String) on FIELD_DEFINITION"),
            SourceDocument("user.graphql", "type User { id: ID!, email: String @auth(role: \"admin\") }"),
            SourceDocument("query.graphql", "type Query { me: User }"),
            SourceDocument("ext.graphql", "extend type User { name: String }"),
        ])

        again = compose([SourceDocument("schema.graphql", composed.sdl)])

        assert again.order == ["schema.graphql"]
        assert print_schema(lexicographic_sort_schema(again.schema)) == print_schema(
            lexicographic_sort_schema(composed.schema)
        )

    def test_schema_extension_merges_last(self):
        composed = compose([
            SourceDocument("a_ext.graphql", "extend schema { mutation: Mutation }"),
            SourceDocument("b_schema.graphql", "schema { query: Query }\ntype Query { ping: String }"),
            SourceDocument("c_types.graphql", "type Mutation { noop: Boolean }"),
        ])

        assert composed.order == ["b_schema.graphql", "c_types.graphql", "a_ext.graphql"]
        assert composed.schema.mutation_type.name == "Mutation"
