"""Exception types raised by the tile space engine."""

from __future__ import annotations


class TileSpaceError(Exception):
    """Base class for every error raised by ``tilespace``."""


class InvalidLayoutError(TileSpaceError, ValueError):
    """Grid input is not a full permutation of ``0 .. size*size-1``."""


class InvalidTransitionError(TileSpaceError, ValueError):
    """Two states are not exactly one legal move apart."""


class NoPathFoundError(TileSpaceError, LookupError):
    """The goal state is absent from an exploration graph."""


class InvalidOperationError(TileSpaceError, RuntimeError):
    """An object was used out of protocol order (caller bug)."""
