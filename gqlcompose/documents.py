"""Parsed schema documents.

Each SDL document is parsed with graphql-core and its top-level
type-system definitions are tagged with an explicit ``Category`` so that
extensions can be matched to the definitions they extend by equality of
(category, name) rather than by inspecting AST kind strings.
"""

from dataclasses import dataclass
from enum import Enum

from graphql import GraphQLError, Source, parse
from graphql.language.ast import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from gqlcompose.discovery import SourceDocument
from gqlcompose.exceptions import DocumentParseError
from gqlcompose.utils.logging import logger


class Category(str, Enum):
    """What a top-level definition declares or extends."""

    TYPE = "type"
    INTERFACE = "interface"
    INPUT = "input"
    ENUM = "enum"
    UNION = "union"
    SCALAR = "scalar"
    SCHEMA = "schema"
    DIRECTIVE = "directive"


# Categories whose definitions introduce a named type
TYPE_CATEGORIES = frozenset({
    Category.TYPE,
    Category.INTERFACE,
    Category.INPUT,
    Category.ENUM,
    Category.UNION,
    Category.SCALAR,
})

# AST node class -> (category, is_extension)
_NODE_CATEGORIES: dict[type, tuple[Category, bool]] = {
    ObjectTypeDefinitionNode: (Category.TYPE, False),
    ObjectTypeExtensionNode: (Category.TYPE, True),
    InterfaceTypeDefinitionNode: (Category.INTERFACE, False),
    InterfaceTypeExtensionNode: (Category.INTERFACE, True),
    InputObjectTypeDefinitionNode: (Category.INPUT, False),
    InputObjectTypeExtensionNode: (Category.INPUT, True),
    EnumTypeDefinitionNode: (Category.ENUM, False),
    EnumTypeExtensionNode: (Category.ENUM, True),
    UnionTypeDefinitionNode: (Category.UNION, False),
    UnionTypeExtensionNode: (Category.UNION, True),
    ScalarTypeDefinitionNode: (Category.SCALAR, False),
    ScalarTypeExtensionNode: (Category.SCALAR, True),
    SchemaDefinitionNode: (Category.SCHEMA, False),
    SchemaExtensionNode: (Category.SCHEMA, True),
    DirectiveDefinitionNode: (Category.DIRECTIVE, False),
}


@dataclass(frozen=True)
class Definition:
    """One top-level type-system definition or extension.

    ``name`` is the declared (or extended) name, or None for schema
    definitions and schema extensions.
    """

    category: Category
    name: str | None
    is_extension: bool
    node: DefinitionNode

    @property
    def target(self) -> tuple[Category, str | None]:
        return (self.category, self.name)

    @property
    def is_type(self) -> bool:
        return self.category in TYPE_CATEGORIES


@dataclass(frozen=True)
class Document:
    """An immutable parsed schema document."""

    name: str
    node: DocumentNode
    definitions: tuple[Definition, ...]

    @property
    def extensions(self) -> tuple[Definition, ...]:
        return tuple(d for d in self.definitions if d.is_extension)

    @property
    def declarations(self) -> tuple[Definition, ...]:
        """Definitions that are not extensions."""
        return tuple(d for d in self.definitions if not d.is_extension)


def classify_definition(node: DefinitionNode) -> Definition | None:
    """Tag an AST definition with its category.

    Returns:
        The tagged definition, or None for nodes that are not part of the
        type system (operations and fragments)
    """
    entry = _NODE_CATEGORIES.get(type(node))
    if entry is None:
        return None

    category, is_extension = entry
    name_node = getattr(node, "name", None)
    name = name_node.value if name_node is not None else None
    return Definition(category=category, name=name, is_extension=is_extension, node=node)


def parse_document(source: SourceDocument) -> Document:
    """Parse one source document.

    Raises:
        DocumentParseError: The text is not valid GraphQL
    """
    try:
        node = parse(Source(source.body, source.name))
    except GraphQLError as e:
        line = column = None
        if e.locations:
            line, column = e.locations[0].line, e.locations[0].column
        raise DocumentParseError(
            f"Syntax error in {source.name}: {e.message}",
            document=source.name,
            line=line,
            column=column,
        ) from e

    definitions = []
    for definition_node in node.definitions:
        definition = classify_definition(definition_node)
        if definition is None:
            logger.debug(f"Ignoring non type-system definition in {source.name}")
            continue
        definitions.append(definition)

    return Document(name=source.name, node=node, definitions=tuple(definitions))


def parse_documents(sources: list[SourceDocument]) -> list[Document]:
    """Parse every source document, preserving discovery order."""
    return [parse_document(source) for source in sources]
