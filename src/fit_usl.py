"""Command line interface to fit USL models to measurement files."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

try:
    from usl import (
        LevenbergMarquardt,
        Measurement,
        Model,
        USLError,
        get_measurements,
        list_datasets,
        load_measurements,
        prediction_table,
    )
except ModuleNotFoundError:  # pragma: no cover - fallback when executed as package
    from .usl import (
        LevenbergMarquardt,
        Measurement,
        Model,
        USLError,
        get_measurements,
        list_datasets,
        load_measurements,
        prediction_table,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fit Universal Scalability Law models to throughput measurements."
    )
    parser.add_argument(
        "--inputs",
        type=Path,
        nargs="+",
        help="CSV files with two of the columns concurrency, throughput, latency.",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        choices=list(list_datasets()),
        help="Named reference dataset instead of --inputs.",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=5_000,
        help="Evaluation budget of the least-squares solver.",
    )
    parser.add_argument(
        "--tolerance", type=float, default=1e-12, help="Solver convergence tolerance."
    )
    parser.add_argument(
        "--predict",
        type=float,
        nargs="+",
        default=[1, 2, 4, 8, 16, 32, 64],
        help="Concurrency levels to tabulate predictions for.",
    )
    return parser.parse_args(argv)


def resolve_sources(args: argparse.Namespace) -> List[Tuple[str, List[Measurement]]]:
    """Return (label, measurements) for every requested input."""
    if bool(args.inputs) == bool(args.dataset):
        raise SystemExit("Provide exactly one of --inputs or --dataset.")
    if args.dataset:
        return [(args.dataset, get_measurements(args.dataset))]

    sources = []
    for path in args.inputs:
        try:
            sources.append((str(path), load_measurements(path)))
        except (FileNotFoundError, ValueError) as exc:
            raise SystemExit(str(exc)) from exc
    return sources


def fit_sources(
    sources: Iterable[Tuple[str, List[Measurement]]], solver: LevenbergMarquardt
) -> List[Tuple[str, Model]]:
    fitted = []
    for label, measurements in tqdm(list(sources), desc="Fitting", unit="file"):
        try:
            model = Model.build(measurements, solver=solver)
        except USLError as exc:
            raise SystemExit(f"{label}: {exc}") from exc
        fitted.append((label, model))
    return fitted


def format_report(label: str, model: Model, predict: Sequence[float]) -> str:
    lines = [f"\nModel for {label}:"]
    for key, value in model.as_dict().items():
        lines.append(f"  {key:<6}: {value:>14.8g}")

    if model.is_limitless():
        lines.append("  limitless: throughput scales linearly (kappa = 0)")
    else:
        lines.append(f"  N_max : {model.max_concurrency():>14.0f}")
        lines.append(f"  X_max : {model.max_throughput():>14.6g}")

    if model.is_contention_constrained():
        lines.append("  constraint: contention (sigma > kappa)")
    elif model.is_coherency_constrained():
        lines.append("  constraint: coherency (sigma < kappa)")
    else:
        lines.append("  constraint: balanced (sigma == kappa)")

    table = prediction_table(model, predict)
    lines.append("\nPredictions:")
    lines.append(table.to_string(index=False))
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        solver = LevenbergMarquardt(tolerance=args.tolerance, max_iterations=args.max_iterations)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    sources = resolve_sources(args)
    for label, model in fit_sources(sources, solver):
        print(format_report(label, model, args.predict))


if __name__ == "__main__":
    main()
