"""Exception hierarchy for a build pass.

Every stage of the pipeline raises one of these; none of them is caught
inside the pipeline. The build controller decides whether a failure ends
the process or is logged while watching continues.
"""

from __future__ import annotations


class ComposeError(Exception):
    """Base class for every failure that aborts a build pass."""


class DiscoveryError(ComposeError):
    """Raised when the source tree or one of its documents cannot be read.

    Attributes:
        path: The directory or file that could not be read
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class EmptyCorpusError(DiscoveryError):
    """Raised when the source tree contains no schema documents."""


class DocumentParseError(ComposeError):
    """Raised when a document's text is not valid SDL.

    Attributes:
        document: Name of the offending document
        line: 1-based line of the first syntax error, if known
        column: 1-based column of the first syntax error, if known
    """

    def __init__(self, message: str, document: str, line: int | None = None,
                 column: int | None = None):
        super().__init__(message)
        self.document = document
        self.line = line
        self.column = column


class DuplicateDocumentError(ComposeError):
    """Raised when two documents resolve to the same name."""

    def __init__(self, document: str):
        super().__init__(f"Duplicate document name: {document}")
        self.document = document


class CycleError(ComposeError):
    """Raised when documents require each other and cannot be ordered.

    Attributes:
        cycles: Each cycle as a list of document names in dependency order
        documents: Sorted names of every document involved in a cycle
    """

    def __init__(self, cycles: list[list[str]]):
        self.cycles = cycles
        self.documents = sorted({name for cycle in cycles for name in cycle})
        rendered = "; ".join(" -> ".join(cycle + cycle[:1]) for cycle in cycles)
        super().__init__(f"Circular dependency between documents: {rendered}")


class AssemblyError(ComposeError):
    """Raised when building or extending the schema with a document fails.

    Attributes:
        document: Name of the document being built or applied
    """

    def __init__(self, message: str, document: str):
        super().__init__(message)
        self.document = document


class SchemaValidationError(ComposeError):
    """Raised when the assembled schema is not well-formed.

    Attributes:
        messages: Every violation, in the order reported
    """

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(
            f"Schema validation failed with {len(self.messages)} error(s)"
        )


class OutputError(ComposeError):
    """Raised when the composed schema cannot be written.

    Attributes:
        path: The destination that could not be written
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
