from typing import List, Tuple

import pytest

from tictactoe_ai.agent import SearchAgent
from tictactoe_ai.board import Board
from tictactoe_ai.errors import ConstructionError, IllegalMoveError, OutOfRangeError
from tictactoe_ai.rules import is_terminal, winner
from tictactoe_ai.score import Score
from tictactoe_ai.session import (
    AwaitingMove,
    Finished,
    GameSession,
    Outcome,
    SessionSnapshot,
)

HUMAN, COMPUTER = 1, 2


class NoMoveAgent(SearchAgent):
    def choose_move(self, board, computer_id, human_id):
        raise AssertionError("computer should not be asked to move")


def test_fresh_session_awaits_primary():
    s = GameSession()
    assert s.players == (HUMAN, COMPUTER)
    assert s.state == AwaitingMove(HUMAN)
    assert not s.is_finished
    assert s.score.as_tuple() == (0, 0, 0)


def test_human_completes_row_and_wins():
    s = GameSession(board=Board([1, 1, 0, 2, 2, 0, 0, 0, 0]), active_player=HUMAN, agent=NoMoveAgent())
    s.submit_move(2, HUMAN)
    assert winner(s.board, HUMAN, COMPUTER) == HUMAN
    assert is_terminal(s.board, HUMAN, COMPUTER)
    assert s.state == Finished(Outcome(HUMAN))
    assert s.score.wins == 1
    assert s.active_player == HUMAN


def test_computer_replies_and_callback_sees_applied_move():
    s = GameSession(agent=SearchAgent(seed=3))
    calls: List[Tuple[int, int]] = []

    def on_move(index, player):
        assert s.cell(index) == player
        assert s.is_locked
        calls.append((index, player))

    s.submit_move(4, HUMAN, on_computer_move=on_move)
    assert len(calls) == 1
    idx, pid = calls[0]
    assert pid == COMPUTER
    assert idx in (0, 2, 6, 8)
    assert s.board.positions_of(COMPUTER) == [idx]
    assert s.state == AwaitingMove(HUMAN)
    assert not s.is_locked


def test_moves_during_computer_turn_are_rejected():
    s = GameSession(agent=SearchAgent(seed=3))
    errors = []

    def on_move(index, player):
        for attempt in (lambda: s.submit_move(0, HUMAN), lambda: s.start_round()):
            try:
                attempt()
            except IllegalMoveError as e:
                errors.append(e)

    s.submit_move(4, HUMAN, on_computer_move=on_move)
    assert len(errors) == 2
    assert len(s.board.positions_of(HUMAN)) == 1
    assert len(s.board.positions_of(COMPUTER)) == 1


def test_illegal_moves_leave_state_untouched():
    s = GameSession(agent=SearchAgent(seed=1))
    with pytest.raises(IllegalMoveError):
        s.submit_move(0, COMPUTER)
    assert s.snapshot() == GameSession().snapshot()

    s.submit_move(4, HUMAN)
    before = s.snapshot()
    with pytest.raises(IllegalMoveError):
        s.submit_move(4, HUMAN)
    with pytest.raises(OutOfRangeError):
        s.submit_move(9, HUMAN)
    assert s.snapshot() == before


def test_no_moves_after_round_is_over():
    s = GameSession(board=Board([1, 1, 0, 2, 2, 0, 0, 0, 0]), agent=NoMoveAgent())
    s.submit_move(2, HUMAN)
    with pytest.raises(IllegalMoveError):
        s.submit_move(6, HUMAN)
    assert s.score.wins == 1


def test_computer_win_counts_as_loss_and_computer_opens_next_round():
    s = GameSession(board=Board([2, 2, 0, 1, 1, 0, 0, 0, 0]), agent=SearchAgent(seed=9))
    s.submit_move(8, HUMAN)
    assert s.board.get(2) == COMPUTER
    assert s.outcome == Outcome(COMPUTER)
    assert s.score.as_tuple() == (0, 1, 0)
    assert s.active_player == COMPUTER

    opened = []
    s.start_round(on_computer_move=lambda i, p: opened.append((i, p)))
    assert len(opened) == 1
    assert s.board.positions_of(COMPUTER) == [opened[0][0]]
    assert s.board.positions_of(HUMAN) == []
    assert s.state == AwaitingMove(HUMAN)
    assert s.score.as_tuple() == (0, 1, 0)


def test_human_win_lets_human_open_next_round():
    s = GameSession(board=Board([1, 1, 0, 2, 2, 0, 0, 0, 0]), agent=NoMoveAgent())
    s.submit_move(2, HUMAN)
    s.start_round()
    assert s.board == Board()
    assert s.state == AwaitingMove(HUMAN)


def test_draw_is_recorded_once():
    s = GameSession(board=Board([1, 2, 1, 1, 2, 2, 2, 1, 0]), agent=NoMoveAgent())
    s.submit_move(8, HUMAN)
    assert s.outcome is not None and s.outcome.is_draw
    assert s.score.as_tuple() == (0, 0, 1)
    assert s.active_player == HUMAN


def test_first_round_with_computer_active_plays_immediately():
    s = GameSession(active_player=COMPUTER, agent=SearchAgent(seed=11))
    s.start_round(first_round=True)
    assert len(s.board.positions_of(COMPUTER)) == 1
    assert s.active_player == HUMAN


def test_first_round_keeps_restored_board():
    b = Board([1, 2, 0, 0, 0, 0, 0, 0, 0])
    s = GameSession(board=b, agent=NoMoveAgent())
    s.start_round(first_round=True)
    assert s.board == Board([1, 2, 0, 0, 0, 0, 0, 0, 0])


def test_reset_score():
    s = GameSession(score=Score(2, 3, 4))
    s.reset_score()
    assert s.score.as_tuple() == (0, 0, 0)


@pytest.mark.parametrize("players", [(1, 1), (0, 2), (1,), (1, 2, 3), (-1, 2), (True, 2)])
def test_bad_player_ids_rejected(players):
    with pytest.raises(ConstructionError):
        GameSession(players=players)


def test_active_player_must_belong_to_game():
    with pytest.raises(ConstructionError):
        GameSession(active_player=3)


def test_snapshot_round_trip():
    s = GameSession(players=(5, 9), score=Score(1, 2, 3), agent=SearchAgent(seed=2))
    s.submit_move(0, 5)
    snap = s.snapshot()
    restored = GameSession.restore(SessionSnapshot.from_dict(snap.to_dict()))
    assert restored.snapshot() == snap
    assert restored.players == (5, 9)
    assert restored.board == s.board
    assert restored.score == s.score
    assert restored.active_player == s.active_player
    assert restored.state == s.state
    assert [restored.cell(i) for i in range(9)] == [s.cell(i) for i in range(9)]


def test_restored_finished_board_does_not_recount():
    snap = SessionSnapshot(players=(1, 2), cells=(1, 1, 1, 2, 2, 0, 0, 0, 0), score=(4, 0, 0), active_player=1)
    s = GameSession.restore(snap)
    assert s.state == Finished(Outcome(1))
    assert s.score.as_tuple() == (4, 0, 0)


@pytest.mark.parametrize("data", [
    {},
    {"players": [1, 2], "cells": [0] * 9, "score": {"wins": 0}, "active_player": 1},
    {"players": [1, 2], "cells": [0] * 9, "score": {"wins": "x", "losses": 0, "draws": 0}, "active_player": 1},
])
def test_malformed_snapshot_rejected(data):
    with pytest.raises(ConstructionError):
        SessionSnapshot.from_dict(data)


def test_optimal_play_against_centre_reply_never_loses():
    # Computer opens anywhere, human takes the centre when it can, else the first free cell.
    for seed in range(3):
        s = GameSession(active_player=COMPUTER, agent=SearchAgent(seed=seed))
        s.start_round(first_round=True)
        human_moves = 0
        while not s.is_finished:
            free = s.board.empty_positions()
            s.submit_move(4 if 4 in free else free[0], HUMAN)
            human_moves += 1
        assert human_moves <= 4
        assert s.outcome is not None and s.outcome.winner != HUMAN
