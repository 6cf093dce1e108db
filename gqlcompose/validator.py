"""Schema well-formedness validation."""

from graphql import GraphQLSchema, validate_schema

from gqlcompose.exceptions import SchemaValidationError
from gqlcompose.utils.logging import logger


def collect_violations(schema: GraphQLSchema) -> list[str]:
    """Return every validation message for ``schema``, in reported order."""
    return [error.message for error in validate_schema(schema)]


def ensure_valid(schema: GraphQLSchema) -> None:
    """Validate the assembled schema.

    Raises:
        SchemaValidationError: At least one violation was found; all of
            them are attached
    """
    logger.info("Validating...")
    violations = collect_violations(schema)
    if violations:
        for message in violations:
            logger.error(message)
        raise SchemaValidationError(violations)
