"""
Play repeated rounds between a scripted human strategy and the computer player.

Rounds go through the regular GameSession commands, so the starting player
carries over from one round to the next exactly as in interactive play.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

from .agent import SearchAgent
from .opponents import Strategy, get_strategy
from .score import Score
from .session import COMPUTER_PLAYER_ID, HUMAN_PLAYER_ID, GameSession, Outcome
from .tracking import log_params, log_score, maybe_mlflow_run


@dataclass
class MatchConfig:
    rounds: int = 10
    opponent: str = "random"
    seed: Optional[int] = None
    human_id: int = HUMAN_PLAYER_ID
    computer_id: int = COMPUTER_PLAYER_ID
    computer_first: bool = False
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


@dataclass
class MatchResult:
    score: Score
    outcomes: List[Outcome] = field(default_factory=list)
    # Player who opened each round
    openers: List[int] = field(default_factory=list)


def play_round(session: GameSession, strategy: Strategy, rng: np.random.Generator) -> Outcome:
    while not session.is_finished:
        mv = strategy(session.board, session.human_id, session.computer_id, rng)
        session.submit_move(mv, session.human_id)
    assert session.outcome is not None
    return session.outcome


def play_match(cfg: MatchConfig) -> MatchResult:
    if cfg.rounds < 1:
        raise ValueError(f"rounds must be >= 1, got {cfg.rounds}")
    strategy = get_strategy(cfg.opponent)
    human_seq, agent_seq = np.random.SeedSequence(cfg.seed).spawn(2)
    rng = np.random.default_rng(human_seq)
    session = GameSession(
        players=(cfg.human_id, cfg.computer_id),
        active_player=cfg.computer_id if cfg.computer_first else cfg.human_id,
        agent=SearchAgent(rng=np.random.default_rng(agent_seq)),
    )
    result = MatchResult(score=session.score)
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="match", log_dir=cfg.log_dir) as tracking:
        if tracking:
            log_params({
                "rounds": cfg.rounds,
                "opponent": cfg.opponent,
                "seed": cfg.seed,
                "computer_first": cfg.computer_first,
            })
        for r in range(cfg.rounds):
            result.openers.append(session.active_player)
            session.start_round(first_round=(r == 0))
            outcome = play_round(session, strategy, rng)
            result.outcomes.append(outcome)
            logging.debug("Round %d/%d opened by %d: winner=%d", r + 1, cfg.rounds, result.openers[-1], outcome.winner)
        logging.info(
            "Match vs %s over %d rounds: wins=%d losses=%d draws=%d",
            cfg.opponent, cfg.rounds, *session.score.as_tuple(),
        )
        if tracking:
            log_score(session.score)
    return result
