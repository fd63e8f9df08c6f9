"""
Rules: move legality, winner and terminal-state detection.
Notes:
- A player wins when one of the 8 triples is a subset of that player's positions.
- The first player argument is checked first; the engine does not arbitrate double wins.
"""
from typing import List, Optional, Sequence

from .board import BOARD_SIZE, EMPTY, Board
from .errors import ConstructionError, OutOfRangeError

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]


def validate_players(players: Sequence[int]) -> None:
    """Two distinct positive integer ids, or ConstructionError."""
    if len(players) != 2:
        raise ConstructionError("Game must have two players")
    for p in players:
        if isinstance(p, bool) or not isinstance(p, int) or p <= 0:
            raise ConstructionError(f"Player ID must be a positive integer: {p!r}")
    if players[0] == players[1]:
        raise ConstructionError(f"Player IDs must differ: {players[0]}")


def check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
        raise OutOfRangeError(index)


def is_legal_move(board: Board, index: int) -> bool:
    check_index(index)
    return board.get(index) == EMPTY


def winning_triple(board: Board, player: int) -> Optional[List[int]]:
    positions = set(board.positions_of(player))
    if len(positions) < 3:
        return None
    for pattern in WIN_PATTERNS:
        if positions.issuperset(pattern):
            return pattern
    return None


def winner(board: Board, player_a: int, player_b: int) -> int:
    """Return the id of the winning player, or 0 when nobody has a triple yet."""
    for p in (player_a, player_b):
        if winning_triple(board, p) is not None:
            return p
    return 0


def is_terminal(board: Board, player_a: int, player_b: int) -> bool:
    return winner(board, player_a, player_b) != 0 or not board.empty_positions()


def is_draw(board: Board, player_a: int, player_b: int) -> bool:
    return not board.empty_positions() and winner(board, player_a, player_b) == 0
