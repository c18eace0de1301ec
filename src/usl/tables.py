"""pandas helpers to move measurements and predictions in and out of tables."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import numpy as np
import pandas as pd

from .measurement import Measurement
from .model import Model

COLUMNS = ("concurrency", "throughput", "latency")


def measurements_from_frame(df: pd.DataFrame) -> List[Measurement]:
    """
    Build measurements from whichever two of the known columns are present.

    Raises:
        ValueError: if fewer than two of concurrency/throughput/latency exist,
            or if any used cell is non-numeric or missing.
    """
    present = {c for c in COLUMNS if c in df.columns}
    if {"concurrency", "throughput"} <= present:
        build, cols = Measurement.of_concurrency_and_throughput, ["concurrency", "throughput"]
    elif {"concurrency", "latency"} <= present:
        build, cols = Measurement.of_concurrency_and_latency, ["concurrency", "latency"]
    elif {"throughput", "latency"} <= present:
        build, cols = Measurement.of_throughput_and_latency, ["throughput", "latency"]
    else:
        raise ValueError(
            f"Need two of {', '.join(COLUMNS)} columns, found: {sorted(df.columns)}"
        )
    numeric = df[cols].apply(pd.to_numeric, errors="coerce")
    bad = numeric.index[~np.isfinite(numeric.to_numpy(dtype=float)).all(axis=1)]
    if len(bad):
        raise ValueError(f"Non-numeric or missing {'/'.join(cols)} values in rows: {bad.tolist()}")
    values = numeric.to_numpy(dtype=float)
    return [build(a, b) for a, b in values]


def measurements_to_frame(measurements: Iterable[Measurement]) -> pd.DataFrame:
    return pd.DataFrame([m.as_dict() for m in measurements], columns=list(COLUMNS))


def load_measurements(path: Path) -> List[Measurement]:
    if not path.exists():
        raise FileNotFoundError(f"Measurements file not found: {path}")
    df = pd.read_csv(path)
    if df.empty:
        raise ValueError(f"Measurements file is empty: {path}")
    return measurements_from_frame(df)


def prediction_table(model: Model, concurrency: Iterable[float]) -> pd.DataFrame:
    """Tabulate predicted throughput and latency at each concurrency level."""
    n = np.asarray(list(concurrency), dtype=float)
    return pd.DataFrame(
        {
            "concurrency": n,
            "throughput": model.throughput_at_concurrency(n),
            "latency": model.latency_at_concurrency(n),
        }
    )
