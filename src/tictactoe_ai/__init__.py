"""tictactoe_ai package.

Board, score and rules, an exhaustive minimax computer player, the game session
that sequences human and computer turns, and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .agent import SearchAgent
from .board import Board
from .errors import ConstructionError, IllegalMoveError, OutOfRangeError, TicTacToeError
from .rules import is_legal_move, is_terminal, winner
from .score import Score
from .session import AwaitingMove, Finished, GameSession, Outcome, SessionSnapshot

__all__ = [
    "Board",
    "Score",
    "SearchAgent",
    "GameSession",
    "SessionSnapshot",
    "AwaitingMove",
    "Finished",
    "Outcome",
    "is_legal_move",
    "winner",
    "is_terminal",
    "TicTacToeError",
    "ConstructionError",
    "OutOfRangeError",
    "IllegalMoveError",
]
