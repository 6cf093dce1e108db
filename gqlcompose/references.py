"""Reference extraction.

Computes, for one parsed document, the names it references (types and
directives) and the (category, name) targets it extends or declares.
Pure functions of the document's AST; nothing here is shared between
documents.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    NamedTypeNode,
    TypeNode,
)

from gqlcompose.documents import Category, Definition, Document, TYPE_CATEGORIES

Target = tuple[Category, str | None]

SCHEMA_TARGET: Target = (Category.SCHEMA, None)

# Categories whose definitions and extensions carry fields
_FIELD_CATEGORIES = frozenset({Category.TYPE, Category.INTERFACE, Category.INPUT})

# Categories whose definitions and extensions may implement interfaces
_IMPLEMENTING_CATEGORIES = frozenset({Category.TYPE, Category.INTERFACE})


@dataclass(frozen=True)
class ReferenceSet:
    """Type and directive names a document uses without defining them."""

    type_names: frozenset[str]
    directive_names: frozenset[str]


@dataclass(frozen=True)
class DocumentProfile:
    """Everything the dependency classifier needs to know about a document.

    Attributes:
        name: Document name
        references: Referenced type and directive names
        extension_targets: (category, name) of every extension; schema
            extensions appear as (SCHEMA, None)
        definition_targets: (category, name) of every non-extension
            definition; a schema definition appears as (SCHEMA, None)
    """

    name: str
    references: ReferenceSet
    extension_targets: frozenset[Target]
    definition_targets: frozenset[Target]

    @property
    def extends_schema(self) -> bool:
        return SCHEMA_TARGET in self.extension_targets

    @property
    def defines_schema(self) -> bool:
        return SCHEMA_TARGET in self.definition_targets

    @property
    def defined_type_names(self) -> frozenset[str]:
        return frozenset(
            name for category, name in self.definition_targets if category in TYPE_CATEGORIES
        )

    @property
    def defined_directive_names(self) -> frozenset[str]:
        return frozenset(
            name for category, name in self.definition_targets if category is Category.DIRECTIVE
        )


def unwrap_type(type_node: TypeNode) -> NamedTypeNode:
    """Strip list and non-null wrappers down to the named type."""
    while not isinstance(type_node, NamedTypeNode):
        type_node = type_node.type
    return type_node


def _directive_names(directives: Iterable[DirectiveNode] | None) -> list[str]:
    return [directive.name.value for directive in directives or ()]


def _collect_field(field, type_names: set[str], directive_names: set[str]) -> None:
    type_names.add(unwrap_type(field.type).name.value)
    directive_names.update(_directive_names(field.directives))

    if isinstance(field, FieldDefinitionNode):
        for argument in field.arguments or ():
            type_names.add(unwrap_type(argument.type).name.value)
            directive_names.update(_directive_names(argument.directives))


def _collect_definition(definition: Definition, type_names: set[str],
                        directive_names: set[str]) -> None:
    node = definition.node
    category = definition.category

    if category is Category.DIRECTIVE:
        # Directive definitions apply no directives but may take typed arguments
        for argument in node.arguments or ():
            type_names.add(unwrap_type(argument.type).name.value)
            directive_names.update(_directive_names(argument.directives))
        return

    directive_names.update(_directive_names(node.directives))

    if category is Category.SCHEMA:
        for operation_type in node.operation_types or ():
            type_names.add(operation_type.type.name.value)
        return

    if category in _IMPLEMENTING_CATEGORIES:
        type_names.update(interface.name.value for interface in node.interfaces or ())

    if category in _FIELD_CATEGORIES:
        for field in node.fields or ():
            _collect_field(field, type_names, directive_names)

    elif category is Category.UNION:
        type_names.update(unwrap_type(member).name.value for member in node.types or ())

    elif category is Category.ENUM:
        for value in node.values or ():
            directive_names.update(_directive_names(value.directives))


def extract_references(document: Document) -> ReferenceSet:
    """Collect the type and directive names a document uses but does not define.

    Type names come from field types, argument types, implemented
    interfaces, union members and root operation types, each unwrapped to
    its base name. Directive names come from every directive application,
    including those on fields, arguments and enum values. Names declared
    by the document itself are left out, so a document never depends on
    another one for something it already provides.
    """
    type_names: set[str] = set()
    directive_names: set[str] = set()

    for definition in document.definitions:
        _collect_definition(definition, type_names, directive_names)

    for definition in document.declarations:
        if definition.is_type:
            type_names.discard(definition.name)
        elif definition.category is Category.DIRECTIVE:
            directive_names.discard(definition.name)

    return ReferenceSet(
        type_names=frozenset(type_names),
        directive_names=frozenset(directive_names),
    )


def extension_targets(document: Document) -> frozenset[Target]:
    """(category, name) of every extension the document declares."""
    return frozenset(definition.target for definition in document.extensions)


def definition_targets(document: Document) -> frozenset[Target]:
    """(category, name) of every definition that is not an extension."""
    return frozenset(definition.target for definition in document.declarations)


def profile_document(document: Document) -> DocumentProfile:
    """Build the read-only profile used for dependency classification."""
    return DocumentProfile(
        name=document.name,
        references=extract_references(document),
        extension_targets=extension_targets(document),
        definition_targets=definition_targets(document),
    )
