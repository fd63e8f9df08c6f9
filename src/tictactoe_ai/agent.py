"""
Computer player: exhaustive minimax over the live board.

Scoring is from the human's side: a human win scores 10 - depth, a computer win
depth - 10 and a draw 0, where depth counts plies from the search root. Human plies
maximize, computer plies minimize. Among equal candidates the first one in
ascending index order is kept.

The board is never copied. Every probe writes a token, recurses and clears the
cell again, so the caller's board is unchanged when a search returns.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .board import BOARD_SIZE, EMPTY, Board
from .errors import IllegalMoveError
from .rules import is_terminal, validate_players, winner

WIN_VALUE = 10


def _leaf_score(board: Board, computer_id: int, human_id: int, depth: int) -> int:
    w = winner(board, human_id, computer_id)
    if w == human_id:
        return WIN_VALUE - depth
    if w == computer_id:
        return depth - WIN_VALUE
    return 0


def _minimax(
    board: Board,
    mover: int,
    computer_id: int,
    human_id: int,
    depth: int,
    nodes: List[int],
) -> Tuple[int, Optional[int]]:
    nodes[0] += 1
    if is_terminal(board, human_id, computer_id):
        return _leaf_score(board, computer_id, human_id, depth), None

    maximizing = mover == human_id
    nxt = computer_id if maximizing else human_id
    best_score: Optional[int] = None
    best_move: Optional[int] = None
    for mv in board.empty_positions():
        board.place(mv, mover)
        try:
            score, _ = _minimax(board, nxt, computer_id, human_id, depth + 1, nodes)
        finally:
            board.place(mv, EMPTY)
        if (
            best_score is None
            or (maximizing and score > best_score)
            or (not maximizing and score < best_score)
        ):
            best_score = score
            best_move = mv
    assert best_score is not None
    return best_score, best_move


class SearchAgent:
    """Chooses moves for the computer player.

    The agent keeps only its random generator; players and board are passed per call.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def choose_move(self, board: Board, computer_id: int, human_id: int) -> int:
        validate_players((human_id, computer_id))
        if len(board.empty_positions()) == BOARD_SIZE:
            # Opening on an empty board is random: skips the largest tree and varies play.
            mv = int(self._rng.integers(0, BOARD_SIZE))
            logging.debug("Random opening move: %d", mv)
            return mv
        _, mv = self.evaluate(board, computer_id, human_id)
        return mv

    def evaluate(self, board: Board, computer_id: int, human_id: int) -> Tuple[int, int]:
        """Run the full search with the computer to move.

        Returns (score, move) for the root. Raises IllegalMoveError when the board is
        already decided and there is nothing to play, and ConstructionError when the
        ids are not two distinct positive integers.
        """
        validate_players((human_id, computer_id))
        if is_terminal(board, human_id, computer_id):
            raise IllegalMoveError("Board is already in a terminal state")
        nodes = [0]
        score, mv = _minimax(board, computer_id, computer_id, human_id, 0, nodes)
        assert mv is not None
        logging.debug("Search visited %d nodes: move=%d score=%d", nodes[0], mv, score)
        return score, mv
