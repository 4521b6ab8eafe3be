"""
Run tracking helpers for arena and benchmark runs (optional MLflow backend).

MLflow is only imported when tracking is requested; when it is missing the
run continues untracked.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def _mlflow():
    try:
        import mlflow  # type: ignore
    except ImportError:
        return None
    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    mlflow = _mlflow() if enabled else None
    if enabled and mlflow is None:
        logging.warning("mlflow is not installed; continuing without tracking")
    if mlflow is None:
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def log_params(params: Dict[str, object]) -> None:
    mlflow = _mlflow()
    if mlflow is not None and mlflow.active_run() is not None:
        mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    mlflow = _mlflow()
    if mlflow is not None and mlflow.active_run() is not None:
        mlflow.log_metrics(metrics)
