#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from tttgame.arena import play_match
from tttgame.game_basics import O, X
from tttgame.solver import best_move, best_move_exhaustive, clear_cache
from tttgame.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    seeds: int = 5
    arena_games: int = 200
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    ap = argparse.ArgumentParser(description="Time the move search and run an arena sweep")
    ap.add_argument("--seeds", type=int, default=Config.seeds)
    ap.add_argument("--arena-games", type=int, default=Config.arena_games)
    ap.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    ns = ap.parse_args()
    cfg = Config(seeds=ns.seeds, arena_games=ns.arena_games, tracking=ns.tracking)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    empty = (0,) * 9
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"seeds": cfg.seeds, "arena_games": cfg.arena_games})
        exhaustive_times: List[float] = []
        memo_times: List[float] = []
        losses = 0
        for s in range(cfg.seeds):
            t0 = time.perf_counter()
            ref = best_move_exhaustive(empty, X, O)
            t1 = time.perf_counter()
            clear_cache()
            fast = best_move(empty, X, O)
            t2 = time.perf_counter()
            if ref != fast:
                logging.error("memoized search disagrees with reference: %s vs %s", fast, ref)
                return 1
            exhaustive_times.append(t1 - t0)
            memo_times.append(t2 - t1)
            for opponent in ("random", "tactical"):
                losses += play_match(opponent, games=cfg.arena_games, seed=s, ai_mark=O).losses
        m_ex, h_ex = ci95(exhaustive_times)
        m_memo, h_memo = ci95(memo_times)
        metrics = {
            "exhaustive_mean_s": m_ex,
            "exhaustive_ci95_half_s": h_ex,
            "memoized_mean_s": m_memo,
            "memoized_ci95_half_s": h_memo,
            "arena_losses": float(losses),
        }
        log_metrics(metrics)
    logging.info(
        "empty-board search: exhaustive mean=%.4fs ± %.4fs, memoized mean=%.4fs ± %.4fs (95%% CI); arena losses=%d",
        m_ex, h_ex, m_memo, h_memo, losses,
    )
    return 1 if losses else 0


if __name__ == "__main__":
    raise SystemExit(main())
