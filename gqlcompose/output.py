"""Canonical printing and output writes.

The destination is only replaced once the full text is on disk next to
it, so an interrupted write never leaves a truncated schema behind.
"""

import os
import tempfile
from pathlib import Path

from graphql import GraphQLSchema, print_schema

from gqlcompose.exceptions import OutputError
from gqlcompose.utils.logging import logger


def render_schema(schema: GraphQLSchema) -> str:
    """Serialize the schema to canonical SDL."""
    return print_schema(schema)


def write_output(output: Path, text: str, encoding: str = "utf-8") -> Path:
    """Write ``text`` verbatim to ``output``, creating parent directories.

    Returns:
        The path written

    Raises:
        OutputError: The destination or its directory is not writable
    """
    output = Path(output)
    logger.info(f"Saving {output}")

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output.name}.", suffix=".tmp", dir=output.parent)
        try:
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(text)
            os.replace(tmp_name, output)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise OutputError(f"Cannot write {output}: {e}", path=str(output)) from e

    return output
