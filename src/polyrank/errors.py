"""Exception types raised by the polytope core."""

from __future__ import annotations

from typing import Optional


class StructuralError(ValueError):
    """A ranked element model references something that does not exist.

    *rank* and *index* locate the offending cell (``None`` when the problem
    is not tied to a single cell).
    """

    def __init__(self, message: str, rank: Optional[int] = None, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.rank = rank
        self.index = index


class UnsupportedConfigurationError(ValueError):
    """Builder parameters fall outside an analytically solved case."""
