"""
Game session: turn sequencing between the human and the computer player.

A session owns its Board and Score. Human moves come in through `submit_move`;
whenever the turn passes to the computer, the session asks its SearchAgent for a
move and applies it before returning. Callers learn about computer moves through
the optional `on_computer_move(index, player_id)` callback.

Rounds end on a win or a full board. The player who made the last move stays
active, so `start_round()` lets that player open the next round.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from .agent import SearchAgent
from .board import Board
from .errors import ConstructionError, IllegalMoveError
from .rules import check_index, is_legal_move, validate_players, winner
from .score import Score

HUMAN_PLAYER_ID = 1
COMPUTER_PLAYER_ID = 2

ComputerMoveCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class Outcome:
    winner: int  # 0 for a draw

    @property
    def is_draw(self) -> bool:
        return self.winner == 0


@dataclass(frozen=True)
class AwaitingMove:
    player: int


@dataclass(frozen=True)
class Finished:
    outcome: Outcome


SessionState = Union[AwaitingMove, Finished]


@dataclass(frozen=True)
class SessionSnapshot:
    """Plain values needed to rebuild a session."""
    players: Tuple[int, int]
    cells: Tuple[int, ...]
    score: Tuple[int, int, int]
    active_player: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'players': list(self.players),
            'cells': list(self.cells),
            'score': {'wins': self.score[0], 'losses': self.score[1], 'draws': self.score[2]},
            'active_player': self.active_player,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionSnapshot":
        try:
            score = data['score']
            return cls(
                players=tuple(int(p) for p in data['players']),  # type: ignore[arg-type]
                cells=tuple(int(c) for c in data['cells']),
                score=(int(score['wins']), int(score['losses']), int(score['draws'])),
                active_player=int(data['active_player']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConstructionError(f"Malformed session snapshot: {type(e).__name__}: {e}") from e


class GameSession:
    def __init__(
        self,
        board: Optional[Board] = None,
        score: Optional[Score] = None,
        players: Iterable[int] = (HUMAN_PLAYER_ID, COMPUTER_PLAYER_ID),
        active_player: Optional[int] = None,
        agent: Optional[SearchAgent] = None,
    ):
        ids = tuple(players)
        validate_players(ids)
        self._players: Tuple[int, int] = (ids[0], ids[1])
        if not active_player:
            active_player = self._players[0]
        elif active_player not in self._players:
            raise ConstructionError(f"Active player {active_player} is not part of the game")
        self._board = board if board is not None else Board()
        self._score = score if score is not None else Score()
        self._active = active_player
        self._agent = agent if agent is not None else SearchAgent()
        self._locked = False
        # A restored board may already be decided; the score was counted when it happened.
        self._outcome: Optional[Outcome] = self._evaluate()

    @classmethod
    def restore(cls, snapshot: SessionSnapshot, agent: Optional[SearchAgent] = None) -> "GameSession":
        return cls(
            board=Board(snapshot.cells),
            score=Score(*snapshot.score),
            players=snapshot.players,
            active_player=snapshot.active_player,
            agent=agent,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            players=self._players,
            cells=self._board.cells,
            score=self._score.as_tuple(),
            active_player=self._active,
        )

    # queries

    @property
    def board(self) -> Board:
        return self._board

    @property
    def score(self) -> Score:
        return self._score

    @property
    def players(self) -> Tuple[int, int]:
        return self._players

    @property
    def human_id(self) -> int:
        return self._players[0]

    @property
    def computer_id(self) -> int:
        return self._players[1]

    @property
    def active_player(self) -> int:
        return self._active

    @property
    def state(self) -> SessionState:
        if self._outcome is not None:
            return Finished(self._outcome)
        return AwaitingMove(self._active)

    @property
    def is_finished(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def is_locked(self) -> bool:
        return self._locked

    def cell(self, index: int) -> int:
        check_index(index)
        return self._board.get(index)

    def other_player(self, player: int) -> int:
        return self._players[1] if player == self._players[0] else self._players[0]

    # commands

    def submit_move(
        self,
        index: int,
        by_player: int,
        on_computer_move: Optional[ComputerMoveCallback] = None,
    ) -> None:
        """Play `index` for `by_player`, then let the computer answer if it is its turn."""
        self._ensure_unlocked()
        if self._outcome is not None:
            raise IllegalMoveError("Round is over; start a new round first")
        if by_player != self._active:
            raise IllegalMoveError(f"Player {by_player} cannot move: it is player {self._active}'s turn")
        if not is_legal_move(self._board, index):
            raise IllegalMoveError(f"Cell {index} is already occupied")
        self._apply(index, by_player, on_computer_move)

    def start_round(
        self,
        first_round: bool = False,
        on_computer_move: Optional[ComputerMoveCallback] = None,
    ) -> None:
        """Begin a round. Except for the very first one, the board is cleared and the
        player who moved last in the previous round opens."""
        self._ensure_unlocked()
        if not first_round:
            self._board.reset()
            self._outcome = None
            logging.debug("New round: player %d starts", self._active)
        if self._outcome is None and self._active == self.computer_id:
            self._play_computer(on_computer_move)

    def reset_score(self) -> None:
        self._score.reset()

    # internals

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise IllegalMoveError("Board is locked while the computer is playing")

    def _evaluate(self) -> Optional[Outcome]:
        w = winner(self._board, self.human_id, self.computer_id)
        if w != 0:
            return Outcome(w)
        if not self._board.empty_positions():
            return Outcome(0)
        return None

    def _apply(self, index: int, player: int, on_computer_move: Optional[ComputerMoveCallback]) -> None:
        self._board.place(index, player)
        logging.debug("Player %d played cell %d", player, index)
        outcome = self._evaluate()
        if outcome is not None:
            self._finish(outcome)
        else:
            self._active = self.other_player(player)
        if player == self.computer_id and on_computer_move is not None:
            on_computer_move(index, player)
        if outcome is None and self._active == self.computer_id:
            self._play_computer(on_computer_move)

    def _play_computer(self, on_computer_move: Optional[ComputerMoveCallback]) -> None:
        self._locked = True
        try:
            mv = self._agent.choose_move(self._board, self.computer_id, self.human_id)
            self._apply(mv, self.computer_id, on_computer_move)
        finally:
            self._locked = False

    def _finish(self, outcome: Outcome) -> None:
        self._outcome = outcome
        if outcome.winner == self.human_id:
            self._score.record_win()
        elif outcome.winner == self.computer_id:
            self._score.record_loss()
        else:
            self._score.record_draw()
        logging.info(
            "Round over: %s (score %d-%d-%d)",
            "draw" if outcome.is_draw else f"player {outcome.winner} wins",
            *self._score.as_tuple(),
        )
