"""Measurements of concurrency, throughput and latency tied by Little's law."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

from .errors import InvalidArgumentError

Pair = Union[Sequence[float], float]


def _unpack(first: Pair, second: Optional[float]) -> Tuple[float, float]:
    """Accept either two scalars or a single two-element sequence."""
    if second is not None:
        try:
            return float(first), float(second)  # type: ignore[arg-type]
        except TypeError as exc:
            raise InvalidArgumentError("Expected two scalar values.") from exc
    try:
        values = list(first)  # type: ignore[arg-type]
    except TypeError as exc:
        raise InvalidArgumentError("Expected two values or a two-element pair.") from exc
    if len(values) != 2:
        raise InvalidArgumentError(f"Expected a pair of two values, got {len(values)}.")
    return float(values[0]), float(values[1])


@dataclass(frozen=True)
class Measurement:
    """One observation of a running system.

    Given any two of concurrency (N), throughput (X) and mean latency (R), the
    third is derived through Little's law N = X * R. Values are stored as
    given; nothing checks that they are positive.
    """

    concurrency: float
    throughput: float
    latency: float

    @classmethod
    def of_concurrency_and_throughput(
        cls, concurrency: Pair, throughput: Optional[float] = None
    ) -> "Measurement":
        """Measurement of the throughput observed with N concurrent workers."""
        n, x = _unpack(concurrency, throughput)
        return cls(concurrency=n, throughput=x, latency=n / x)

    @classmethod
    def of_concurrency_and_latency(
        cls, concurrency: Pair, latency: Optional[float] = None
    ) -> "Measurement":
        """Measurement of the mean latency observed with N concurrent workers."""
        n, r = _unpack(concurrency, latency)
        return cls(concurrency=n, throughput=n / r, latency=r)

    @classmethod
    def of_throughput_and_latency(
        cls, throughput: Pair, latency: Optional[float] = None
    ) -> "Measurement":
        """Measurement of the mean latency observed at a given throughput."""
        x, r = _unpack(throughput, latency)
        return cls(concurrency=x * r, throughput=x, latency=r)

    @classmethod
    def of_throughput_and_concurrency(
        cls, throughput: Pair, concurrency: Optional[float] = None
    ) -> "Measurement":
        x, n = _unpack(throughput, concurrency)
        return cls.of_concurrency_and_throughput(n, x)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)
