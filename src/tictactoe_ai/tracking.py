"""
Match tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional extra.
Tracking failures are logged and never interrupt a match.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from .score import Score


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off or unavailable."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore

        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("MLflow tracking unavailable (%s: %s); continuing without it", type(e).__name__, e)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
    except Exception as e:
        logging.warning("Failed to log params: %s", e)


def log_score(score: Score) -> None:
    metrics = {
        "wins": float(score.wins),
        "losses": float(score.losses),
        "draws": float(score.draws),
        "rounds": float(score.total),
    }
    try:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)
    except Exception as e:
        logging.warning("Failed to log metrics: %s", e)
