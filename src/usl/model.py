"""Universal Scalability Law model: fitting, predictions and classification.

The model describes throughput as a function of concurrency:

    X(N) = λN / (1 + σ(N - 1) + κN(N - 1))

with σ the contention coefficient, κ the crosstalk (coherency) coefficient and
λ the throughput of a single worker. Every other prediction is derived from
that equation and Little's law. Equation numbers refer to Schwartz, "Practical
Scalability Analysis with the Universal Scalability Law".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import numpy as np

from .errors import InsufficientDataError
from .measurement import Measurement
from .solver import LevenbergMarquardt, Solver

ArrayLike = Union[float, Iterable[float], np.ndarray]

MIN_MEASUREMENTS = 6
INITIAL_SIGMA = 0.1
INITIAL_KAPPA = 0.01


def _as_output(value: ArrayLike, result: np.ndarray) -> Union[float, np.ndarray]:
    """Return a float for scalar inputs and an array otherwise."""
    if np.ndim(value) == 0:
        return float(np.asarray(result).item())
    return result


def _usl(n: np.ndarray, sigma: float, kappa: float, lambda_: float) -> np.ndarray:
    return (lambda_ * n) / (1 + sigma * (n - 1) + kappa * n * (n - 1))


@dataclass(frozen=True)
class Model:
    """A parametrized Universal Scalability Law model.

    Coefficients are stored as given. Degenerate values (κ = 0, negative
    coefficients) are not rejected: the formulas then return inf or NaN and
    callers are expected to check `is_limitless()` first.
    """

    sigma: float
    kappa: float
    lambda_: float

    @classmethod
    def of(cls, sigma: float, kappa: float, lambda_: float) -> "Model":
        return cls(sigma=sigma, kappa=kappa, lambda_=lambda_)

    @classmethod
    def build(
        cls, measurements: Iterable[Measurement], solver: Optional[Solver] = None
    ) -> "Model":
        """
        Fit a model to a collection of measurements.

        Finds the coefficients of X = λN/(1+σ(N-1)+κN(N-1)) minimizing the
        squared throughput residuals, starting from σ=0.1, κ=0.01 and the best
        observed per-worker throughput for λ.

        Raises:
            InsufficientDataError: with fewer than six measurements.
            FitDidNotConvergeError: if the solver fails to converge.
        """
        points = list(measurements)
        if len(points) < MIN_MEASUREMENTS:
            raise InsufficientDataError(
                f"Needs at least {MIN_MEASUREMENTS} measurements, got {len(points)}."
            )

        n = np.array([m.concurrency for m in points], dtype=float)
        x = np.array([m.throughput for m in points], dtype=float)

        def residuals(params: np.ndarray) -> np.ndarray:
            sigma, kappa, lambda_ = params
            return x - _usl(n, sigma, kappa, lambda_)

        def jacobian(params: np.ndarray) -> np.ndarray:
            sigma, kappa, lambda_ = params
            denom = 1 + sigma * (n - 1) + kappa * n * (n - 1)
            scale = lambda_ * n / denom**2
            return np.column_stack([scale * (n - 1), scale * n * (n - 1), -n / denom])

        initial = [INITIAL_SIGMA, INITIAL_KAPPA, float(np.max(x / n))]
        if solver is None:
            solver = LevenbergMarquardt()
        sigma, kappa, lambda_ = solver.minimize(residuals, initial, jacobian=jacobian)
        return cls(sigma=float(sigma), kappa=float(kappa), lambda_=float(lambda_))

    @staticmethod
    def collector() -> "ModelCollector":
        return ModelCollector()

    def throughput_at_concurrency(self, n: ArrayLike) -> Union[float, np.ndarray]:
        """Expected throughput with `n` concurrent workers (Equation 3)."""
        arr = np.asarray(n, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            result = _usl(arr, self.sigma, self.kappa, self.lambda_)
        return _as_output(n, result)

    def latency_at_concurrency(self, n: ArrayLike) -> Union[float, np.ndarray]:
        """Expected mean latency with `n` concurrent workers (Equation 6)."""
        arr = np.asarray(n, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            result = (1 + self.sigma * (arr - 1) + self.kappa * arr * (arr - 1)) / np.float64(
                self.lambda_
            )
        return _as_output(n, result)

    def max_concurrency(self) -> float:
        """Concurrency at which throughput peaks, floored (Equation 4).

        Infinite or NaN when κ = 0.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            result = np.floor(np.sqrt((1 - np.float64(self.sigma)) / np.float64(self.kappa)))
        return float(result)

    def max_throughput(self) -> float:
        return float(self.throughput_at_concurrency(self.max_concurrency()))

    def latency_at_throughput(self, x: ArrayLike) -> Union[float, np.ndarray]:
        """Expected mean latency at throughput `x` (Equation 8)."""
        arr = np.asarray(x, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            result = (self.sigma - 1) / (self.sigma * arr - self.lambda_)
        return _as_output(x, result)

    def throughput_at_latency(self, r: ArrayLike) -> Union[float, np.ndarray]:
        """Expected throughput at mean latency `r` (Equation 9)."""
        arr = np.asarray(r, dtype=float)
        sigma, kappa = np.float64(self.sigma), np.float64(self.kappa)
        with np.errstate(divide="ignore", invalid="ignore"):
            root = np.sqrt(sigma**2 + kappa**2 + 2 * kappa * (2 * self.lambda_ * arr + sigma - 2))
            result = (root - kappa + sigma) / (2 * kappa * arr)
        return _as_output(r, result)

    def concurrency_at_latency(self, r: ArrayLike) -> Union[float, np.ndarray]:
        """Expected number of concurrent workers at mean latency `r` (Equation 10)."""
        arr = np.asarray(r, dtype=float)
        sigma, kappa = np.float64(self.sigma), np.float64(self.kappa)
        with np.errstate(divide="ignore", invalid="ignore"):
            root = np.sqrt(sigma**2 + kappa**2 + 2 * kappa * (2 * self.lambda_ * arr + sigma - 2))
            result = (kappa - sigma + root) / (2 * kappa)
        return _as_output(r, result)

    def concurrency_at_throughput(self, x: ArrayLike) -> Union[float, np.ndarray]:
        """Expected number of concurrent workers at throughput `x` (Little's law)."""
        arr = np.asarray(x, dtype=float)
        result = np.asarray(self.latency_at_throughput(arr)) * arr
        return _as_output(x, result)

    def is_coherency_constrained(self) -> bool:
        return self.sigma < self.kappa

    def is_contention_constrained(self) -> bool:
        return self.sigma > self.kappa

    def is_limitless(self) -> bool:
        """True when the system scales linearly (κ = 0)."""
        return self.kappa == 0

    def as_dict(self) -> Dict[str, float]:
        return {"sigma": self.sigma, "kappa": self.kappa, "lambda": self.lambda_}


@dataclass
class ModelCollector:
    """Accumulates measurements incrementally and fits a model at the end."""

    measurements: List[Measurement] = field(default_factory=list)

    def add(self, measurement: Measurement) -> None:
        self.measurements.append(measurement)

    def extend(self, measurements: Iterable[Measurement]) -> None:
        for m in measurements:
            self.add(m)

    def merge(self, other: "ModelCollector") -> "ModelCollector":
        """Combine two partial collections, preserving order."""
        self.measurements.extend(other.measurements)
        return self

    def __len__(self) -> int:
        return len(self.measurements)

    def build(self, solver: Optional[Solver] = None) -> Model:
        return Model.build(self.measurements, solver=solver)
