"""One build pass.

discover -> parse -> extract/classify -> order -> assemble -> validate -> emit

Every entity is created fresh for the pass and discarded at its end.
The output file is touched only after validation succeeds.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from graphql import GraphQLSchema

from gqlcompose.assembler import assemble_schema
from gqlcompose.config import load_runtime_config
from gqlcompose.discovery import SourceDocument, discover_documents
from gqlcompose.documents import parse_documents
from gqlcompose.exceptions import ComposeError
from gqlcompose.graph import resolve_merge_order
from gqlcompose.output import render_schema, write_output
from gqlcompose.utils.logging import logger
from gqlcompose.validator import ensure_valid


@dataclass
class ComposedSchema:
    """A validated schema together with the order it was folded in."""

    schema: GraphQLSchema
    order: list[str]
    sdl: str

    @property
    def type_count(self) -> int:
        return sum(1 for name in self.schema.type_map if not name.startswith("__"))


@dataclass
class BuildResult:
    """Outcome of one build pass."""

    success: bool
    order: list[str] = field(default_factory=list)
    output_path: Path | None = None
    type_count: int = 0
    error: ComposeError | None = None
    duration: float = 0.0

    @property
    def messages(self) -> list[str]:
        """Every failure message; validation failures report one per violation."""
        if self.error is None:
            return []
        violations = getattr(self.error, "messages", None)
        return list(violations) if violations else [str(self.error)]


def compose(sources: list[SourceDocument]) -> ComposedSchema:
    """Run the computational stages over already-read sources.

    Raises:
        ComposeError: Any stage failed
    """
    ordered = resolve_merge_order(parse_documents(sources))

    schema = assemble_schema(ordered)
    ensure_valid(schema)

    order = [document.name for document in ordered]
    return ComposedSchema(schema=schema, order=order, sdl=render_schema(schema))


def build(source: Path, output: Path, config: dict[str, Any] | None = None) -> BuildResult:
    """Compose every document under ``source`` and write the result to ``output``.

    Raises:
        ComposeError: Any stage failed; nothing was written
    """
    config = config or load_runtime_config()
    started = time.monotonic()

    sources = discover_documents(Path(source), config, exclude=[Path(output)])
    composed = compose(sources)
    written = write_output(Path(output), composed.sdl, encoding=config["discovery"]["encoding"])

    return BuildResult(
        success=True,
        order=composed.order,
        output_path=written,
        type_count=composed.type_count,
        duration=time.monotonic() - started,
    )


def run_build(source: Path, output: Path, config: dict[str, Any] | None = None) -> BuildResult:
    """Run one build pass, turning a pipeline failure into a failed result.

    Unexpected exceptions are not pipeline failures and propagate.
    """
    started = time.monotonic()
    try:
        return build(source, output, config)
    except ComposeError as e:
        logger.error(f"Build failed: {e}")
        return BuildResult(success=False, error=e, duration=time.monotonic() - started)
