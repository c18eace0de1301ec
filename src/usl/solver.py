"""Nonlinear least-squares solvers used to fit model coefficients.

`Model.build` only depends on the `Solver` protocol: anything that can take a
vector-valued residual function and an initial guess and return converged
parameters can be plugged in. The default is MINPACK's Levenberg-Marquardt as
exposed by `scipy.optimize.least_squares`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

import numpy as np
from scipy.optimize import least_squares

from .errors import FitDidNotConvergeError

ResidualFn = Callable[[np.ndarray], np.ndarray]
JacobianFn = Callable[[np.ndarray], np.ndarray]


class Solver(Protocol):
    def minimize(
        self,
        residuals: ResidualFn,
        initial_guess: Sequence[float],
        jacobian: Optional[JacobianFn] = None,
    ) -> np.ndarray:
        """Return parameters minimizing the sum of squared residuals."""
        ...


@dataclass(frozen=True)
class LevenbergMarquardt:
    """Damped Gauss-Newton solver with a bounded evaluation budget."""

    tolerance: float = 1e-12
    max_iterations: int = 5_000

    def __post_init__(self) -> None:
        if not self.tolerance >= np.finfo(float).eps:
            raise ValueError(
                f"Solver tolerance must be at least machine epsilon ({np.finfo(float).eps:.3g})."
            )
        if self.max_iterations < 1:
            raise ValueError("Solver max_iterations must be >= 1.")

    def minimize(
        self,
        residuals: ResidualFn,
        initial_guess: Sequence[float],
        jacobian: Optional[JacobianFn] = None,
    ) -> np.ndarray:
        """
        Run Levenberg-Marquardt from `initial_guess`.

        Raises:
            FitDidNotConvergeError: when the budget runs out, the solver
                rejects or fails on the problem, or the initial guess or
                parameters are not finite.
        """
        x0 = np.asarray(initial_guess, dtype=float)
        if not np.all(np.isfinite(x0)):
            raise FitDidNotConvergeError(
                "Unable to fit a model for these values: non-finite initial guess."
            )
        try:
            result = least_squares(
                residuals,
                x0,
                jac=jacobian if jacobian is not None else "2-point",
                method="lm",
                ftol=self.tolerance,
                xtol=self.tolerance,
                gtol=self.tolerance,
                x_scale="jac",
                max_nfev=self.max_iterations,
            )
        except ValueError as exc:
            raise FitDidNotConvergeError(f"Unable to fit a model for these values: {exc}") from exc
        if not result.success:
            raise FitDidNotConvergeError(
                f"Unable to fit a model for these values: {result.message}"
            )
        params = np.asarray(result.x, dtype=float)
        if not np.all(np.isfinite(params)):
            raise FitDidNotConvergeError(
                "Unable to fit a model for these values: non-finite parameters."
            )
        return params
