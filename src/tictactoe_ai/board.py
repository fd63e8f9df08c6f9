"""
Board representation and the 9-digit board string codec.
Notes:
- A board is 9 cells in row-major order: 0=empty, any positive int is a player id.
- The board is mutable; search writes into it and restores each cell afterwards.
"""
from typing import Iterable, List, Optional, Tuple

from .errors import ConstructionError

BOARD_SIZE = 9
EMPTY = 0
OUT_OF_RANGE = -1


class Board:
    __slots__ = ('_cells',)

    def __init__(self, cells: Optional[Iterable[int]] = None):
        if cells is None:
            self._cells = [EMPTY] * BOARD_SIZE
            return
        values = list(cells)
        if len(values) != BOARD_SIZE:
            raise ConstructionError(f"Board must have {BOARD_SIZE} cells, got {len(values)}")
        for v in values:
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise ConstructionError(f"Invalid cell value: {v!r}")
        self._cells = values

    def place(self, index: int, player: int) -> None:
        """Write `player` into cell `index`, overwriting it. Out-of-range indices are ignored."""
        if 0 <= index < BOARD_SIZE:
            self._cells[index] = player

    def get(self, index: int) -> int:
        if 0 <= index < BOARD_SIZE:
            return self._cells[index]
        return OUT_OF_RANGE

    def empty_positions(self) -> List[int]:
        return [i for i, v in enumerate(self._cells) if v == EMPTY]

    def positions_of(self, player: int) -> List[int]:
        return [i for i, v in enumerate(self._cells) if v == player]

    def reset(self) -> None:
        self._cells = [EMPTY] * BOARD_SIZE

    @property
    def cells(self) -> Tuple[int, ...]:
        return tuple(self._cells)

    def copy(self) -> "Board":
        return Board(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({serialize_board(self)!r})"


def serialize_board(board: Board) -> str:
    return ''.join(str(cell) for cell in board.cells)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != BOARD_SIZE or any(c not in "0123456789" for c in raw):
        raise ValueError(f"Invalid board string {board_str!r}. Must be {BOARD_SIZE} digits.")
    return Board(int(c) for c in raw)
