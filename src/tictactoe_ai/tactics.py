"""
Tactics and simple motifs: immediate wins and forks.
Probes are played on the board itself and undone right away, like the search does.
"""
from typing import List

from .board import EMPTY, Board
from .rules import winning_triple


def immediate_winning_moves(board: Board, player: int) -> List[int]:
    wins: List[int] = []
    for i in board.empty_positions():
        board.place(i, player)
        try:
            if winning_triple(board, player) is not None:
                wins.append(i)
        finally:
            board.place(i, EMPTY)
    return wins


def fork_moves(board: Board, player: int) -> List[int]:
    forks: List[int] = []
    for i in board.empty_positions():
        board.place(i, player)
        try:
            if winning_triple(board, player) is None and len(immediate_winning_moves(board, player)) >= 2:
                forks.append(i)
        finally:
            board.place(i, EMPTY)
    return forks
