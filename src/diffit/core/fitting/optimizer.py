"""Levenberg-Marquardt least-squares fitting of ``Function`` objects.

The fitter minimizes ``sum((f(x_i) - y_i)**2)`` over the samples of a curve,
using the function's analytic derivatives for the Jacobian. Each proposed
step is checked against every parameter's constraints before it is scored;
a rejected step only raises the damping. Fitted values and their standard
errors are written back into the function's parameters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy import linalg

from diffit.core.domain.config import FitConfig
from diffit.core.fitting.results import FitReport
from diffit.core.shared.exceptions import OptimizationError

if TYPE_CHECKING:
    from diffit.core.domain.curve import Curve
    from diffit.core.fitting.functions import Function
    from diffit.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


def _solve_normal(a: FloatArray, b: FloatArray) -> FloatArray:
    """Solve ``a @ x = b`` for symmetric ``a``; least squares when singular."""
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return np.full_like(b, np.nan)
    try:
        factor = linalg.cho_factor(a, check_finite=False)
        return linalg.cho_solve(factor, b, check_finite=False)
    except linalg.LinAlgError:
        return linalg.lstsq(a, b)[0]


def _standard_errors(jtj: FloatArray, chisqr: float, dof: int) -> FloatArray:
    """Linearized standard errors ``sqrt(diag((J^T J)^-1) * chisqr / dof)``."""
    if not np.all(np.isfinite(jtj)):
        return np.full(jtj.shape[0], np.nan)
    try:
        cov = linalg.inv(jtj)
    except linalg.LinAlgError:
        cov = linalg.pinv(jtj)
    variances = np.clip(np.diag(cov), 0.0, None) * (chisqr / dof)
    return np.sqrt(variances)


class LevenbergMarquardtFitter:
    """Damped Gauss-Newton fitter honouring parameter constraints.

    Args:
        config: Iteration and tolerance settings, defaults when omitted
    """

    def __init__(self, config: FitConfig | None = None) -> None:
        self.config = config or FitConfig()

    @staticmethod
    def jacobian(function: Function, xs: FloatArray, par_values: FloatArray) -> FloatArray:
        """Matrix of partial derivatives, one column per parameter."""
        jac = np.empty((xs.size, par_values.size), dtype=np.float64)
        for i in range(par_values.size):
            jac[:, i] = np.broadcast_to(
                np.asarray(function.dy(xs, i, par_values), dtype=np.float64), xs.shape
            )
        return jac

    @staticmethod
    def residuals(function: Function, xs: FloatArray, ys: FloatArray, par_values: FloatArray) -> FloatArray:
        model = np.broadcast_to(np.asarray(function.y(xs, par_values), dtype=np.float64), xs.shape)
        return ys - model

    def _accepts(self, function: Function, proposal: FloatArray, errors: FloatArray) -> bool:
        if not np.all(np.isfinite(proposal)):
            return False
        return all(
            function.parameter_at(i).check_constraints(float(proposal[i]), float(errors[i]))
            for i in range(proposal.size)
        )

    def fit(self, function: Function, curve: Curve) -> FitReport:
        """Fit ``function`` to ``curve`` in place.

        Args:
            function: Function whose parameters are optimized
            curve: Samples to fit

        Returns
        -------
            FitReport describing the run; the fitted values and errors are
            stored in the function's parameters
        """
        n_params = function.parameter_count()
        n_points = curve.count()
        if n_points == 0 or n_params == 0:
            return FitReport.skipped(n_points, n_params)

        cfg = self.config
        xs, ys = curve.xs, curve.ys
        par_values = function.values()
        if par_values.size != n_params:
            msg = f"Parameter vector has {par_values.size} entries, expected {n_params}"
            raise OptimizationError(msg)

        dof = max(n_points - n_params, 1)
        resid = self.residuals(function, xs, ys, par_values)
        chisqr = float(resid @ resid)
        jac = self.jacobian(function, xs, par_values)
        lam = cfg.lambda_init

        success = False
        message = "Maximum number of iterations reached"
        iterations = 0
        while iterations < cfg.max_iterations:
            iterations += 1
            jtj = jac.T @ jac
            grad = jac.T @ resid
            errors = _standard_errors(jtj, chisqr, dof)

            step = _solve_normal(jtj + lam * np.diag(np.diag(jtj)), grad)
            proposal = par_values + step

            accepted = False
            new_chisqr = chisqr
            new_resid = resid
            if self._accepts(function, proposal, errors):
                new_resid = self.residuals(function, xs, ys, proposal)
                new_chisqr = float(new_resid @ new_resid)
                accepted = bool(np.isfinite(new_chisqr)) and new_chisqr < chisqr

            if not accepted:
                lam *= cfg.lambda_factor
                if lam > cfg.lambda_max:
                    success = True
                    message = "Damping limit reached; no further improvement"
                    break
                continue

            rel_change = (chisqr - new_chisqr) / chisqr if chisqr > 0 else 0.0
            step_norm = float(np.linalg.norm(step))
            par_values = proposal
            resid, chisqr = new_resid, new_chisqr
            jac = self.jacobian(function, xs, par_values)
            lam /= cfg.lambda_factor
            logger.debug("LM iteration %d: chisqr=%.6g lambda=%.3g", iterations, chisqr, lam)

            if rel_change <= cfg.ftol:
                success = True
                message = "Relative reduction of chi-squared below ftol"
                break
            if step_norm <= cfg.xtol * (float(np.linalg.norm(par_values)) + cfg.xtol):
                success = True
                message = "Step size below xtol"
                break

        errors = _standard_errors(jac.T @ jac, chisqr, dof)
        for i in range(n_params):
            function.parameter_at(i).set_value(float(par_values[i]), float(errors[i]))

        report = FitReport(
            success=success,
            iterations=iterations,
            chisqr=chisqr,
            n_points=n_points,
            n_params=n_params,
            message=message,
        )
        logger.debug(
            "%s fit finished after %d iterations: %s (chisqr=%.6g)",
            type(function).__name__,
            iterations,
            message,
            chisqr,
        )
        return report
