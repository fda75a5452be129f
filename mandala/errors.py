"""Exception hierarchy for petal ingestion, tessellation and animation."""

from __future__ import annotations


class MandalaError(Exception):
    """Base class for every error raised by the mandala package."""


class PathSourceError(MandalaError):
    """A geometry file could not be read or decoded."""


class PathGrammarError(MandalaError):
    """No path data was found, or the path data is malformed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class TessellationError(MandalaError):
    """An outline is degenerate and cannot be filled with triangles."""


class ContractViolation(MandalaError):
    """A caller broke a timing or value precondition of the animation clock."""
