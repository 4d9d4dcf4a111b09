"""Resolved template source entity."""

from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Any, BinaryIO


@dataclass
class ResolvedResource:
    """A template source located under one of the configured roots.

    Produced fresh on every successful lookup. The stream is opened by the
    loader and owned by the caller from then on; use the resource as a
    context manager or call read_text()/read_bytes() to consume and close it.

    Attributes:
        name: Template name as requested by the caller
        root: Root that supplied the template ("" for absolute path mode)
        path: File the stream was opened on
        last_modified: Modification time of the file when it was opened
        stream: Open binary stream over the file
    """

    name: str
    root: str
    path: Path
    last_modified: float
    stream: BinaryIO = field(repr=False)

    def read_bytes(self) -> bytes:
        """Read the whole source and close the stream."""
        with self.stream:
            return self.stream.read()

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read the whole source as text and close the stream."""
        return self.read_bytes().decode(encoding)

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "ResolvedResource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization (the stream is omitted)."""
        return {
            "name": self.name,
            "root": self.root,
            "path": str(self.path),
            "last_modified": self.last_modified,
        }
