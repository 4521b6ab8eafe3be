from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from .arena import OPPONENTS, play_match
from .config import GameConfig
from .controller import GameController
from .game_basics import SYMBOLS, O, X, current_player, deserialize_board, evaluate, is_valid_state, other
from .render import render_session
from .session import Mode
from .solver import best_move, best_move_exhaustive
from .tracking import log_metrics, log_params, maybe_mlflow_run

PLAY_HELP = """Commands:
  0-8         play a cell
  j STEP      jump to a history step (0 = start)
  m single|two  switch mode (restarts the game)
  r           restart
  t           toggle theme
  h           show this help
  q           quit"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_eval = sub.add_parser("evaluate", help="Classify a board (9 digits, 0=empty,1=X,2=O)")
    p_eval.add_argument("--board", help="Board string, e.g., 110220000 (omit with --stdin)")
    p_eval.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_best = sub.add_parser("best-move", help="Optimal move for the side to move")
    p_best.add_argument("--board", help="Board string, e.g., 100020000 (omit with --stdin)")
    p_best.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )
    p_best.add_argument(
        "--reference",
        action="store_true",
        help="Use the un-memoized exhaustive search (slow from near-empty boards)",
    )

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument("--mode", choices=[m.value for m in Mode], default=None,
                        help="single (vs AI, default) or two (local)")
    p_play.add_argument("--delay-ms", type=int, default=None,
                        help="Delay before the AI replies (default: TTT_AI_DELAY_MS or 500)")

    p_arena = sub.add_parser("arena", help="Play the AI against a scripted opponent")
    p_arena.add_argument("--opponent", choices=OPPONENTS, default="random")
    p_arena.add_argument("--games", type=int, default=100)
    p_arena.add_argument("--seed", type=int, default=42)
    p_arena.add_argument("--ai", choices=["X", "O"], default="O", help="Mark played by the AI")
    p_arena.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_arena.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    return p


def _read_board(raw: str) -> Optional[tuple]:
    try:
        b = deserialize_board(raw)
    except ValueError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _iter_stdin_boards():
    for line in sys.stdin:
        raw = line.strip()
        if not raw:
            continue
        try:
            b = deserialize_board(raw)
        except ValueError:
            continue
        if is_valid_state(b):
            yield raw, b


def _search_side_to_move(b: tuple, reference: bool):
    me = current_player(b)
    search = best_move_exhaustive if reference else best_move
    return me, search(b, me, other(me))


def _cmd_evaluate(ns: argparse.Namespace) -> int:
    if ns.stdin:
        import csv as _csv
        w = _csv.writer(sys.stdout)
        w.writerow(["board", "status", "mark", "line"])
        for raw, b in _iter_stdin_boards():
            out = evaluate(b)
            w.writerow([
                raw,
                out.status,
                SYMBOLS[out.mark] if out.mark else "",
                ' '.join(map(str, out.line or ())),
            ])
        return 0
    b = _read_board(ns.board or "")
    if b is None:
        return 2
    out = evaluate(b)
    logging.info(
        "status=%s mark=%s line=%s",
        out.status,
        SYMBOLS[out.mark] if out.mark else None,
        list(out.line) if out.line else None,
    )
    return 0


def _cmd_best_move(ns: argparse.Namespace) -> int:
    if ns.stdin:
        import csv as _csv
        w = _csv.writer(sys.stdout)
        w.writerow(["board", "to_move", "index", "score"])
        for raw, b in _iter_stdin_boards():
            me, res = _search_side_to_move(b, ns.reference)
            w.writerow([raw, SYMBOLS[me], "" if res.index is None else res.index, res.score])
        return 0
    b = _read_board(ns.board or "")
    if b is None:
        return 2
    me, res = _search_side_to_move(b, ns.reference)
    logging.info("to_move=%s index=%s score=%d", SYMBOLS[me], res.index, res.score)
    return 0


async def _play(cfg: GameConfig) -> int:
    loop = asyncio.get_running_loop()
    ctl = GameController(cfg)
    print(PLAY_HELP)
    print(render_session(ctl.session))
    while True:
        try:
            line = await loop.run_in_executor(None, input, "> ")
        except EOFError:
            return 0
        parts = line.split()
        if not parts:
            continue
        cmd, args = parts[0].lower(), parts[1:]
        try:
            if cmd == "q":
                return 0
            elif cmd == "h":
                print(PLAY_HELP)
                continue
            elif cmd.isdigit():
                if not ctl.click(int(cmd)):
                    print("Move not allowed.")
                    continue
            elif cmd == "j" and len(args) == 1 and args[0].isdigit():
                ctl.jump(int(args[0]))
            elif cmd == "m" and len(args) == 1:
                ctl.switch_mode(args[0])
            elif cmd == "r":
                ctl.restart()
            elif cmd == "t":
                ctl.toggle_theme()
            else:
                print("Unknown command; type h for help.")
                continue
        except ValueError as e:
            print(f"Error: {e}")
            continue
        print(render_session(ctl.session))
        if ctl.ai_thinking:
            await ctl.wait_idle()
            print(render_session(ctl.session))


def _cmd_arena(ns: argparse.Namespace) -> int:
    if ns.games < 0:
        logging.error("--games must be >= 0: %s", ns.games)
        return 2
    ai_mark = X if ns.ai == "X" else O
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="arena", log_dir=ns.log_dir):
        log_params({"opponent": ns.opponent, "games": ns.games, "seed": ns.seed, "ai": ns.ai})
        res = play_match(ns.opponent, games=ns.games, seed=ns.seed, ai_mark=ai_mark)
        summary = res.summary()
        log_metrics(summary)
    logging.info(
        "win_rate=%.3f draw_rate=%.3f loss_rate=%.3f mean_length=%.2f",
        summary["win_rate"], summary["draw_rate"], summary["loss_rate"], summary["mean_length"],
    )
    return 1 if res.losses else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("tttgame"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.cmd == "evaluate":
        return _cmd_evaluate(ns)

    if ns.cmd == "best-move":
        return _cmd_best_move(ns)

    if ns.cmd == "play":
        try:
            cfg = GameConfig.from_env()
            if ns.mode is not None:
                cfg.mode = Mode(ns.mode)
            if ns.delay_ms is not None:
                cfg = GameConfig(ai_delay_ms=ns.delay_ms, mode=cfg.mode, theme=cfg.theme)
        except ValueError as e:
            logging.error("%s", e)
            return 2
        return asyncio.run(_play(cfg))

    if ns.cmd == "arena":
        return _cmd_arena(ns)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
