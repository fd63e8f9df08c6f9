"""
Scripted human strategies used to exercise the computer player.

Every strategy has the signature (board, me, opponent, rng) -> cell index and
only reads the board (tactics probes are undone before returning).
"""
from typing import Callable, Dict, List

import numpy as np

from .board import Board
from .tactics import fork_moves, immediate_winning_moves

CENTER = 4

Strategy = Callable[[Board, int, int, np.random.Generator], int]


def _pick(moves: List[int], rng: np.random.Generator) -> int:
    return int(rng.choice(moves))


def random_move(board: Board, me: int, opponent: int, rng: np.random.Generator) -> int:
    return _pick(board.empty_positions(), rng)


def greedy_move(board: Board, me: int, opponent: int, rng: np.random.Generator) -> int:
    """Win if possible, otherwise block, otherwise play anywhere."""
    for p in (me, opponent):
        moves = immediate_winning_moves(board, p)
        if moves:
            return moves[0]
    return random_move(board, me, opponent, rng)


def tactical_move(board: Board, me: int, opponent: int, rng: np.random.Generator) -> int:
    for p in (me, opponent):
        moves = immediate_winning_moves(board, p)
        if moves:
            return moves[0]
    forks = fork_moves(board, me)
    if forks:
        return forks[0]
    if CENTER in board.empty_positions():
        return CENTER
    return random_move(board, me, opponent, rng)


STRATEGIES: Dict[str, Strategy] = {
    'random': random_move,
    'greedy': greedy_move,
    'tactical': tactical_move,
}


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown opponent strategy: {name}") from None
