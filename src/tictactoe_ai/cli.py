from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .agent import SearchAgent
from .board import BOARD_SIZE, EMPTY, Board, deserialize_board
from .errors import IllegalMoveError, TicTacToeError
from .paths import state_file
from .rules import is_terminal, validate_players
from .session import COMPUTER_PLAYER_ID, HUMAN_PLAYER_ID, GameSession
from .simulate import MatchConfig, play_match
from .store import load_snapshot, save_snapshot


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe against an unbeatable computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random opening")
    p.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Session file (default: $TTT_STATE_FILE, $TTT_STATE_DIR/session.json or .ttt/session.json)",
    )

    p_new = sub.add_parser("new", help="Start a new session (discards any saved one)")
    p_new.add_argument("--human-id", type=int, default=HUMAN_PLAYER_ID, help="Human player id")
    p_new.add_argument("--computer-id", type=int, default=COMPUTER_PLAYER_ID, help="Computer player id")
    p_new.add_argument("--computer-first", action="store_true", help="Let the computer open the first round")

    p_move = sub.add_parser("move", help="Play a cell (0-8, row-major) for the human player")
    p_move.add_argument("cell", type=int, help="Cell index 0-8")

    sub.add_parser("next", help="Start the next round once the current one is over")
    sub.add_parser("show", help="Show the board, score and whose turn it is")
    sub.add_parser("reset-score", help="Reset wins, losses and draws to zero")

    p_sug = sub.add_parser("suggest", help="Ask the computer for its move on a board")
    p_sug.add_argument("--board", required=True, help="Board string, e.g. 120000000 (0=empty)")
    p_sug.add_argument("--computer-id", type=int, default=COMPUTER_PLAYER_ID)
    p_sug.add_argument("--human-id", type=int, default=HUMAN_PLAYER_ID)

    p_sim = sub.add_parser("simulate", help="Play many rounds against a scripted human strategy")
    p_sim.add_argument("--rounds", type=int, default=10, help="Number of rounds (default: 10)")
    p_sim.add_argument(
        "--opponent",
        choices=["random", "greedy", "tactical"],
        default="random",
        help="Human strategy (default: random)",
    )
    p_sim.add_argument("--computer-first", action="store_true", help="Let the computer open the first round")
    p_sim.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_sim.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (for mlflow local backend)",
    )

    return p


def render_board(board: Board, human_id: int, computer_id: int) -> str:
    marks = {human_id: "X", computer_id: "O"}
    rows = []
    for r in range(3):
        cells = []
        for i in range(r * 3, r * 3 + 3):
            v = board.get(i)
            cells.append(str(i) if v == EMPTY else marks.get(v, "?"))
        rows.append(" | ".join(cells))
    return "\n---------\n".join(rows)


def _print_session(session: GameSession) -> None:
    print(render_board(session.board, session.human_id, session.computer_id))
    wins, losses, draws = session.score.as_tuple()
    print(f"score: wins={wins} losses={losses} draws={draws}")
    outcome = session.outcome
    if outcome is None:
        who = "you" if session.active_player == session.human_id else "computer"
        print(f"to move: {who}")
    elif outcome.is_draw:
        print("round over: draw")
    elif outcome.winner == session.human_id:
        print("round over: you win")
    else:
        print("round over: computer wins")


def _on_computer_move(index: int, player: int) -> None:
    logging.info("computer (player %d) plays cell %d", player, index)


def _load_session(path: Path, seed: Optional[int]) -> GameSession:
    if not path.exists():
        raise FileNotFoundError(f"No saved session at {path}; run 'ttt new' first")
    return GameSession.restore(load_snapshot(path), agent=SearchAgent(seed=seed))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-ai"))
        except Exception:
            print("unknown")
        return 0

    path = ns.state if ns.state is not None else state_file()
    try:
        if ns.cmd == "new":
            session = GameSession(
                players=(ns.human_id, ns.computer_id),
                active_player=ns.computer_id if ns.computer_first else ns.human_id,
                agent=SearchAgent(seed=ns.seed),
            )
            session.start_round(first_round=True, on_computer_move=_on_computer_move)
            save_snapshot(path, session.snapshot())
            _print_session(session)
            return 0

        if ns.cmd == "move":
            session = _load_session(path, ns.seed)
            session.submit_move(ns.cell, session.human_id, on_computer_move=_on_computer_move)
            save_snapshot(path, session.snapshot())
            _print_session(session)
            return 0

        if ns.cmd == "next":
            session = _load_session(path, ns.seed)
            if not session.is_finished:
                raise IllegalMoveError("Current round is still in progress")
            session.start_round(on_computer_move=_on_computer_move)
            save_snapshot(path, session.snapshot())
            _print_session(session)
            return 0

        if ns.cmd == "show":
            _print_session(_load_session(path, ns.seed))
            return 0

        if ns.cmd == "reset-score":
            session = _load_session(path, ns.seed)
            session.reset_score()
            save_snapshot(path, session.snapshot())
            _print_session(session)
            return 0

        if ns.cmd == "suggest":
            validate_players((ns.human_id, ns.computer_id))
            board = deserialize_board(ns.board)
            agent = SearchAgent(seed=ns.seed)
            if is_terminal(board, ns.human_id, ns.computer_id):
                raise IllegalMoveError("Board is already decided; no move to suggest")
            if len(board.empty_positions()) == BOARD_SIZE:
                logging.info("move=%d (random opening)", agent.choose_move(board, ns.computer_id, ns.human_id))
            else:
                score, mv = agent.evaluate(board, ns.computer_id, ns.human_id)
                logging.info("move=%d score=%d", mv, score)
            return 0

        if ns.cmd == "simulate":
            result = play_match(MatchConfig(
                rounds=ns.rounds,
                opponent=ns.opponent,
                seed=ns.seed,
                computer_first=ns.computer_first,
                tracking=ns.tracking,
                log_dir=ns.log_dir,
            ))
            wins, losses, draws = result.score.as_tuple()
            logging.info("wins=%d losses=%d draws=%d", wins, losses, draws)
            return 0
    except (TicTacToeError, ValueError, FileNotFoundError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
