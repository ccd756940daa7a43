"""Immutable grid state model for the sliding puzzle."""

from __future__ import annotations

import math
import random
from enum import StrEnum
from typing import NamedTuple, Sequence

from tilespace.errors import InvalidLayoutError, InvalidTransitionError

EMPTY = 0
DEFAULT_SIZE = 3


class Direction(StrEnum):
    """Direction the *empty* slot travels on a move.

    ``Direction.RIGHT`` swaps the blank with the tile on its right, so that
    tile slides left.
    """

    UP = "up"
    DOWN = "down"
    RIGHT = "right"
    LEFT = "left"

    @property
    def vector(self) -> tuple[int, int]:
        """``(d_row, d_column)`` displacement of the blank."""
        return _VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_vector(cls, vector: tuple[int, int]) -> Direction | None:
        for direction, v in _VECTORS.items():
            if v == vector:
                return direction
        return None


_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.RIGHT: (0, 1),
    Direction.LEFT: (0, -1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
}


class GridPosition(NamedTuple):
    """A ``(row, column)`` cell address, 0-indexed."""

    row: int
    column: int

    @classmethod
    def from_index(cls, index: int, size: int) -> GridPosition:
        row, column = divmod(index, size)
        return cls(row, column)

    def to_index(self, size: int) -> int:
        return self.row * size + self.column

    def offset(self, direction: Direction) -> GridPosition:
        d_row, d_column = direction.vector
        return GridPosition(self.row + d_row, self.column + d_column)

    def distance(self, other: tuple[int, int]) -> int:
        """Manhattan distance to *other*."""
        return abs(self.row - other[0]) + abs(self.column - other[1])

    def __sub__(self, other: tuple[int, int]) -> tuple[int, int]:  # type: ignore[override]
        return (self.row - other[0], self.column - other[1])


# -- validation helpers -------------------------------------------------------


def _resolve_size(count: int, size: int | None) -> int:
    if size is None:
        size = math.isqrt(count)
        if size * size != count:
            raise InvalidLayoutError(
                f"{count} tiles cannot form a square grid."
            )
    elif count != size * size:
        raise InvalidLayoutError(
            f"Expected {size * size} tiles for a {size}×{size} grid, "
            f"got {count}."
        )
    if size < 2:
        raise InvalidLayoutError("A grid needs at least 2×2 cells.")
    return size


def _validate_cells(cells: tuple[int, ...], size: int) -> int:
    """Check the permutation with a bitmask and return the blank's index."""
    total = size * size
    seen = 0
    empty_index = -1
    for index, value in enumerate(cells):
        if not 0 <= value < total:
            raise InvalidLayoutError(
                f"Tile {value} is outside the range 0..{total - 1}."
            )
        bit = 1 << value
        if seen & bit:
            raise InvalidLayoutError(f"Tile {value} appears more than once.")
        seen |= bit
        if value == EMPTY:
            empty_index = index
    if seen != (1 << total) - 1:
        raise InvalidLayoutError(
            f"Grid must contain every tile from 0 to {total - 1} exactly once."
        )
    return empty_index


def _coerce(values: Sequence[int | str]) -> tuple[int, ...]:
    try:
        return tuple(int(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise InvalidLayoutError(f"Tiles must be integers: {exc}") from exc


# -- state --------------------------------------------------------------------


class PuzzleState:
    """One immutable arrangement of tiles on a square grid.

    Cells are stored row-major in a tuple; 0 is the blank. Equality and
    hashing are structural, so two states built independently from the same
    layout are interchangeable as dict keys.
    """

    __slots__ = ("_size", "_cells", "_empty_index", "_hash")

    _size: int
    _cells: tuple[int, ...]
    _empty_index: int
    _hash: int

    def __init__(self, values: Sequence[int | str], size: int | None = None) -> None:
        cells = _coerce(values)
        size = _resolve_size(len(cells), size)
        empty_index = _validate_cells(cells, size)
        self._assign(size, cells, empty_index)

    def _assign(self, size: int, cells: tuple[int, ...], empty_index: int) -> None:
        self._size = size
        self._cells = cells
        self._empty_index = empty_index
        self._hash = hash((size, cells))

    @classmethod
    def _trusted(cls, size: int, cells: tuple[int, ...], empty_index: int) -> PuzzleState:
        """Build without validation; only for cells derived from a valid state."""
        obj = object.__new__(cls)
        obj._assign(size, cells, empty_index)
        return obj

    # -- construction helpers -------------------------------------------------

    @classmethod
    def create(cls, values: Sequence[int | str], size: int | None = None) -> PuzzleState:
        """Create a validated state from a flat row-major tile list.

        Example::

            PuzzleState.create([1, 2, 3, 4, 5, 6, 7, 0, 8])

        Raises ``InvalidLayoutError`` when the list is not a permutation of
        ``0 .. size*size-1``.
        """
        return cls(values, size)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int | str]]) -> PuzzleState:
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidLayoutError(f"Every row must have {size} cells.")
        return cls([v for row in rows for v in row], size)

    @classmethod
    def try_create(
        cls, values: Sequence[int | str], size: int | None = None
    ) -> tuple[bool, PuzzleState | None]:
        """Non-raising variant of :meth:`create` for user-entered layouts."""
        try:
            return True, cls(values, size)
        except InvalidLayoutError:
            return False, None

    @classmethod
    def create_random(
        cls, size: int = DEFAULT_SIZE, rng: random.Random | None = None
    ) -> PuzzleState:
        """Return a uniformly shuffled permutation (either parity)."""
        cells = list(range(size * size))
        (rng or random).shuffle(cells)
        return cls._trusted(size, tuple(cells), cells.index(EMPTY))

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def total_cells(self) -> int:
        return self._size * self._size

    @property
    def values(self) -> tuple[int, ...]:
        """Row-major tiles, suitable for feeding back into :meth:`create`."""
        return self._cells

    @property
    def empty_position(self) -> GridPosition:
        return GridPosition.from_index(self._empty_index, self._size)

    def rows(self) -> list[list[int]]:
        n = self._size
        return [list(self._cells[r * n : (r + 1) * n]) for r in range(n)]

    def in_bounds(self, position: tuple[int, int]) -> bool:
        row, column = position
        return 0 <= row < self._size and 0 <= column < self._size

    def __getitem__(self, position: tuple[int, int]) -> int:
        if not self.in_bounds(position):
            raise IndexError(
                f"Position {tuple(position)} is outside the "
                f"{self._size}×{self._size} grid."
            )
        row, column = position
        return self._cells[row * self._size + column]

    def find(self, value: int) -> GridPosition:
        """Return where tile *value* sits."""
        try:
            index = self._cells.index(value)
        except ValueError:
            raise KeyError(value) from None
        return GridPosition.from_index(index, self._size)

    # -- moves ----------------------------------------------------------------

    def can_swap(self, target: tuple[int, int]) -> bool:
        """True if *target* is on the grid and orthogonally next to the blank."""
        if not self.in_bounds(target):
            return False
        return self.empty_position.distance(target) == 1

    def swap(self, target: tuple[int, int]) -> PuzzleState | None:
        """Exchange the blank with the tile at *target*.

        Returns a new state, or ``None`` if the swap is not a legal move.
        """
        if not self.can_swap(target):
            return None
        row, column = target
        target_index = row * self._size + column
        cells = list(self._cells)
        cells[self._empty_index], cells[target_index] = (
            cells[target_index],
            cells[self._empty_index],
        )
        return PuzzleState._trusted(self._size, tuple(cells), target_index)

    def moved(self, direction: Direction) -> PuzzleState | None:
        """Return the state after sliding the blank in *direction*."""
        return self.swap(self.empty_position.offset(direction))

    def move_direction_to(self, other: PuzzleState) -> Direction:
        """Return the single blank move that turns this state into *other*.

        Raises ``InvalidTransitionError`` if the two states are not one
        legal move apart.
        """
        direction = None
        if other.size == self._size:
            direction = Direction.from_vector(
                other.empty_position - self.empty_position
            )
        if direction is None:
            raise InvalidTransitionError(
                f"No single move leads from\n{self}\nto\n{other}"
            )
        return direction

    # -- parity ---------------------------------------------------------------

    def inversions(self) -> int:
        """Pairwise inversion count over non-blank tiles, row-major."""
        flat = [v for v in self._cells if v != EMPTY]
        count = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    count += 1
        return count

    @property
    def parity(self) -> int:
        return self.inversions() % 2

    def is_even_parity(self) -> bool:
        return self.parity == 0

    @property
    def reachability_class(self) -> int:
        """Invariant under legal moves; equal classes are mutually reachable.

        On odd widths this is the plain parity. On even widths a vertical
        move flips the inversion parity, so the blank's row (counted from
        the bottom) is folded in.
        """
        if self._size % 2 == 1:
            return self.parity
        blank_from_bottom = self._size - 1 - self.empty_position.row
        return (self.inversions() + blank_from_bottom) % 2

    # -- dunder ---------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self._hash == other._hash and self._cells == other._cells and self._size == other._size

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"PuzzleState({list(self._cells)!r}, size={self._size})"

    def __str__(self) -> str:
        width = len(str(self.total_cells - 1))
        return "\n".join(
            " ".join(f"{v:>{width}}" for v in row) for row in self.rows()
        )
