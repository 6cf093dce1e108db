"""Schema assembly.

Folds documents in merge order into one ``GraphQLSchema``: the first
document is built from scratch, every following one extends the
accumulated schema. The fold is strictly sequential.
"""

from collections.abc import Sequence

from graphql import GraphQLError, GraphQLObjectType, GraphQLSchema, build_ast_schema, extend_schema

from gqlcompose.documents import Document
from gqlcompose.exceptions import AssemblyError
from gqlcompose.utils.logging import logger

# Root operation -> conventional type name
CONVENTIONAL_ROOT_TYPES = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}


def declares_schema(schema: GraphQLSchema) -> bool:
    """Whether any document contributed a schema definition or extension."""
    return schema.ast_node is not None or bool(schema.extension_ast_nodes)


def apply_conventional_roots(schema: GraphQLSchema) -> GraphQLSchema:
    """Fill unset root operation types from types named Query, Mutation, Subscription.

    ``build_ast_schema`` only applies this convention to the document it
    builds from, so types introduced by later extensions would otherwise
    never become roots. Schemas with an explicit schema definition or
    extension are returned unchanged.
    """
    if declares_schema(schema):
        return schema

    kwargs = schema.to_kwargs()
    changed = False
    for operation, type_name in CONVENTIONAL_ROOT_TYPES.items():
        if kwargs[operation] is not None:
            continue
        root_type = schema.type_map.get(type_name)
        if isinstance(root_type, GraphQLObjectType):
            kwargs[operation] = root_type
            changed = True

    return GraphQLSchema(**kwargs) if changed else schema


def assemble_schema(documents: Sequence[Document]) -> GraphQLSchema:
    """Fold ordered documents into one schema.

    Args:
        documents: Documents in merge order

    Returns:
        The assembled schema

    Raises:
        AssemblyError: Building or extending with a document failed, e.g.
            because it references or extends something no earlier document
            defines
    """
    if not documents:
        raise AssemblyError("No documents to assemble", document="")

    schema: GraphQLSchema | None = None
    for index, document in enumerate(documents):
        try:
            if index == 0:
                logger.info(f"Building schema with {document.name}.")
                schema = build_ast_schema(document.node)
            else:
                logger.info(f"Extending with {document.name}.")
                schema = extend_schema(schema, document.node)
        except (GraphQLError, TypeError) as e:
            raise AssemblyError(f"{document.name}: {e}", document=document.name) from e

    return apply_conventional_roots(schema)
