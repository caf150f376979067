"""CLI entrypoint: ``agesim run`` grows an organism, ``agesim plot`` renders a run.

Run settings resolve as CLI > ``--config`` JSON file > built-in defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from agesim.config.constants import (
    GRID_LENGTH,
    GROWTH_RATE,
    MUTATION_RATE,
    NUM_STEPS,
    REFERENCE_GENOME,
    SEED,
)
from agesim.config.types import MutationMode, RunConfig, Settings
from agesim.io.schemas import (
    CELLS_FILENAME,
    ENTROPY_FILENAME,
    HISTORY_FILENAME,
    RUN_METADATA_FILENAME,
)
from agesim.simulation.engine import run_simulation, summarize
from agesim.viz.render import (
    load_cells,
    load_entropy,
    load_history,
    render_cell_grid,
    render_entropy,
    render_history,
)
from agesim.viz.theme import REGISTERED_THEMES, get_theme

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Accept a bool or one of the usual on/off strings."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Accept an int or integral float; booleans are rejected."""
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValueError(f"{key} must be an integer value, got {raw!r}")


def _coerce_float(raw: object, key: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    raise ValueError(f"{key} must be a number, got {raw!r}")


def _coerce_str(raw: object, key: str) -> str:
    if isinstance(raw, str):
        return raw
    raise ValueError(f"{key} must be a string, got {raw!r}")


def _resolve(
    cli_val: object,
    key: str,
    file_cfg: dict[str, object],
    default: T,
    coerce: Callable[[object, str], T],
) -> T:
    """CLI > file > default, then coerce the winner."""
    if cli_val is not None:
        return coerce(cli_val, key)
    return coerce(file_cfg.get(key, default), key)


def _parse_mutation_mode(raw_mode: str) -> MutationMode:
    try:
        return MutationMode(raw_mode)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in MutationMode)
        raise ValueError(f"mutation-mode must be one of {valid}") from exc


def _load_config_file(parser: argparse.ArgumentParser, path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    if not isinstance(loaded, dict):
        parser.error(f"Config file must contain a JSON object: {path}")
    return loaded


# ---------------------------------------------------------------------------
# Subcommand parsers
# ---------------------------------------------------------------------------


def _build_run_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("run", help="Grow an organism and write run artifacts")
    p.set_defaults(func=_handle_run)
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    p.add_argument("--length", type=int, default=None)
    p.add_argument("--genome", type=str, default=None)
    p.add_argument("--mutation-rate", type=float, default=None)
    p.add_argument("--growth-rate", type=float, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument(
        "--mutation-mode",
        type=str,
        choices=[mode.value for mode in MutationMode],
        default=None,
    )
    p.add_argument("--steps", type=int, default=None)
    p.add_argument("--out-dir", type=Path, default=None)
    p.add_argument(
        "--seeded",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Seed the random source from --seed (default: on)",
    )
    p.add_argument("--snapshot-interval", type=int, default=None)
    p.add_argument("--write-cells", action=argparse.BooleanOptionalAction, default=None)


def _build_plot_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("plot", help="Render grid, history, and entropy figures for a run")
    p.set_defaults(func=_handle_plot)
    p.add_argument("--run-dir", type=Path, required=True)
    p.add_argument("--output-dir", type=Path, default=None)
    p.add_argument("--step", type=int, default=None, help="Grid snapshot step (default: last)")


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _handle_run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    file_cfg = _load_config_file(parser, args.config)

    try:
        settings = Settings(
            length=_resolve(args.length, "length", file_cfg, GRID_LENGTH, _coerce_int),
            genome=_resolve(
                args.genome, "genome", file_cfg, REFERENCE_GENOME, _coerce_str
            ).upper(),
            mutation_rate=_resolve(
                args.mutation_rate, "mutation_rate", file_cfg, MUTATION_RATE, _coerce_float
            ),
            growth_rate=_resolve(
                args.growth_rate, "growth_rate", file_cfg, GROWTH_RATE, _coerce_float
            ),
            seed=_resolve(args.seed, "seed", file_cfg, SEED, _coerce_int),
            mutation_mode=_parse_mutation_mode(
                _resolve(
                    args.mutation_mode,
                    "mutation_mode",
                    file_cfg,
                    MutationMode.WHOLE_GENOME.value,
                    _coerce_str,
                )
            ),
        )
        out_dir = args.out_dir
        if out_dir is None and file_cfg.get("out_dir") is not None:
            out_dir = Path(_coerce_str(file_cfg["out_dir"], "out_dir"))
        config = RunConfig(
            steps=_resolve(args.steps, "steps", file_cfg, NUM_STEPS, _coerce_int),
            out_dir=out_dir,
            seeded=_resolve(args.seeded, "seeded", file_cfg, True, _coerce_bool),
            snapshot_interval=_resolve(
                args.snapshot_interval, "snapshot_interval", file_cfg, 10, _coerce_int
            ),
            write_cells=_resolve(args.write_cells, "write_cells", file_cfg, True, _coerce_bool),
        )
    except ValueError as exc:
        parser.error(str(exc))

    result = run_simulation(settings, config)
    print(json.dumps(summarize(result), ensure_ascii=False, indent=2))


def _handle_plot(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    logs_dir = Path(args.run_dir) / "logs"
    metadata_path = logs_dir / RUN_METADATA_FILENAME
    if not metadata_path.exists():
        parser.error(f"Run metadata not found: {metadata_path}")
    metadata = json.loads(metadata_path.read_text())
    length = int(metadata["settings"]["length"])
    output_dir = Path(args.output_dir) if args.output_dir is not None else Path(args.run_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    theme = get_theme(args.theme)

    history = load_history(logs_dir / HISTORY_FILENAME)
    render_history(history, output_dir / "history.png", theme=theme)
    entropies = load_entropy(logs_dir / ENTROPY_FILENAME)
    render_entropy(entropies, output_dir / "entropy.png", theme=theme)

    cells_path = logs_dir / CELLS_FILENAME
    if cells_path.exists():
        step, rows = load_cells(cells_path, args.step)
        render_cell_grid(
            positions=[(int(r["x"]), int(r["y"])) for r in rows],
            ages=[float(r["age"]) for r in rows],
            length=length,
            output_path=output_dir / f"grid_step{step}.png",
            title=f"Step {step} ({len(rows)} cells)",
            theme=theme,
        )
    else:
        logger.warning("no %s in %s; skipping grid render", CELLS_FILENAME, logs_dir)


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Cell-population ageing simulation")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument(
        "--theme",
        type=str,
        default="default",
        choices=sorted(REGISTERED_THEMES),
        help="Theme preset name for plot output",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_run_parser(sub)
    _build_plot_parser(sub)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args, parser)


if __name__ == "__main__":
    main()
