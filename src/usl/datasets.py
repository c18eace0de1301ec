"""Reference measurement sets with published USL fits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .measurement import Measurement


@dataclass(frozen=True)
class Dataset:
    name: str
    description: str
    points: Tuple[Tuple[float, float], ...]  # (concurrency, throughput)

    def measurements(self) -> List[Measurement]:
        return [Measurement.of_concurrency_and_throughput(p) for p in self.points]


CISCO = Dataset(
    name="cisco",
    description=(
        "Cisco benchmark from Baron Schwartz, Practical Scalability Analysis "
        "with the Universal Scalability Law"
    ),
    points=(
        (1, 955.16),
        (2, 1878.91),
        (3, 2688.01),
        (4, 3548.68),
        (5, 4315.54),
        (6, 5130.43),
        (7, 5931.37),
        (8, 6531.08),
        (9, 7219.8),
        (10, 7867.61),
        (11, 8278.71),
        (12, 8646.7),
        (13, 9047.84),
        (14, 9426.55),
        (15, 9645.37),
        (16, 9897.24),
        (17, 10097.6),
        (18, 10240.5),
        (19, 10532.39),
        (20, 10798.52),
        (21, 11151.43),
        (22, 11518.63),
        (23, 11806),
        (24, 12089.37),
        (25, 12075.41),
        (26, 12177.29),
        (27, 12211.41),
        (28, 12158.93),
        (29, 12155.27),
        (30, 12118.04),
        (31, 12140.4),
        (32, 12074.39),
    ),
)

DATASETS: Dict[str, Dataset] = {CISCO.name: CISCO}


def list_datasets() -> Iterable[str]:
    """Return available dataset identifiers."""
    return sorted(DATASETS.keys())


def get_measurements(name: str) -> List[Measurement]:
    """Return the measurements of a named dataset."""
    key = name.lower()
    if key not in DATASETS:
        raise KeyError(f"Dataset '{name}' is not defined. Available: {list_datasets()}")
    return DATASETS[key].measurements()
