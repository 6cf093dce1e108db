"""Document source discovery.

Walks the source tree, keeps files whose name ends in a schema-document
suffix, and reads them concurrently. The caller receives one completed,
name-sorted list of ``SourceDocument`` or the first error; nothing is
parsed until every read has finished.
"""

import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gqlcompose.exceptions import DiscoveryError, EmptyCorpusError
from gqlcompose.utils.constants import DEFAULT_SCHEMA_EXTENSIONS
from gqlcompose.utils.logging import logger


@dataclass(frozen=True)
class SourceDocument:
    """Raw text of one schema document, named by its path relative to the root."""

    name: str
    body: str


def is_schema_file(filename: str, extensions: Iterable[str] = DEFAULT_SCHEMA_EXTENSIONS) -> bool:
    """Check whether a file name carries a schema-document suffix (case-insensitive)."""
    lowered = filename.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


class DocumentWalker:
    """Finds and reads schema documents under a root directory."""

    def __init__(self, root_path: Path, extensions: Iterable[str] = DEFAULT_SCHEMA_EXTENSIONS,
                 follow_symlinks: bool = False, max_workers: int = 8,
                 encoding: str = "utf-8", exclude: Iterable[Path] = ()):
        """Initialize the walker.

        Args:
            root_path: Root directory to walk
            extensions: File name suffixes that mark a schema document
            follow_symlinks: Whether to descend into symlinked directories
            max_workers: Number of concurrent file reads
            encoding: Text encoding of the documents
            exclude: Files to leave out even if they match (e.g. the output file)
        """
        self.root_path = Path(root_path)
        self.extensions = tuple(extensions)
        self.follow_symlinks = follow_symlinks
        self.max_workers = max(1, max_workers)
        self.encoding = encoding
        self.exclude = {Path(p).resolve() for p in exclude}

    def _raise_walk_error(self, error: OSError) -> None:
        raise DiscoveryError(
            f"Cannot read directory {error.filename}: {error.strerror}",
            path=error.filename,
        ) from error

    def find_files(self) -> list[Path]:
        """Return every candidate document, sorted by relative name."""
        if not self.root_path.is_dir():
            raise DiscoveryError(
                f"Source directory not found: {self.root_path}", path=str(self.root_path)
            )

        files = []
        for dirpath, dirnames, filenames in os.walk(
            self.root_path, onerror=self._raise_walk_error, followlinks=self.follow_symlinks
        ):
            dirnames.sort()
            for filename in filenames:
                if not is_schema_file(filename, self.extensions):
                    continue
                file = Path(dirpath) / filename
                if file.resolve() in self.exclude:
                    logger.debug(f"Skipping excluded file {file}")
                    continue
                files.append(file)

        files.sort(key=self.relative_name)
        return files

    def relative_name(self, file: Path) -> str:
        """Document name: path relative to the root, with '/' separators."""
        return file.relative_to(self.root_path).as_posix()

    def read_file(self, file: Path) -> SourceDocument:
        try:
            with open(file, encoding=self.encoding) as f:
                body = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DiscoveryError(f"Cannot read {file}: {e}", path=str(file)) from e
        return SourceDocument(name=self.relative_name(file), body=body)

    def read_all(self) -> list[SourceDocument]:
        """Read every candidate document concurrently.

        Results keep the sorted discovery order. The first failed read is
        raised once all submitted reads have settled.
        """
        files = self.find_files()
        if not files:
            raise EmptyCorpusError(
                f"No schema documents ({', '.join(self.extensions)}) found under {self.root_path}",
                path=str(self.root_path),
            )

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.read_file, f) for f in files]
            return [future.result() for future in futures]


def discover_documents(root: Path, config: dict[str, Any],
                       exclude: Iterable[Path] = ()) -> list[SourceDocument]:
    """Discover and read all schema documents under ``root``.

    Args:
        root: Source directory
        config: Runtime configuration (uses the ``discovery`` section)
        exclude: Files to ignore, typically the output file

    Returns:
        Source documents in discovery order
    """
    settings = config["discovery"]
    walker = DocumentWalker(
        root,
        extensions=settings["extensions"],
        follow_symlinks=settings["follow_symlinks"],
        max_workers=settings["max_workers"],
        encoding=settings["encoding"],
        exclude=exclude,
    )
    return walker.read_all()
