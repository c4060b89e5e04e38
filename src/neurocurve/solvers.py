# src/neurocurve/solvers.py
import numpy as np
from scipy.integrate import solve_ivp

from .models.one_compartment import one_compartment_first_order


def simulate_one_compartment(ka_per_h: float, ke_per_h: float, t_end_h: float,
                             dt_h: float = 0.25, bioavailability: float = 1.0,
                             rtol: float = 1e-8, atol: float = 1e-10):
    """
    Numerically integrate the one-compartment, first-order absorption model
    for a unit dose placed in the depot at t=0.

    This is the reference the closed-form Bateman curve is checked against;
    the curve generator itself never calls it.

    Returns:
      t : array of time points (hours), starting at 0
      C : array of central-compartment amounts (dose units, V = 1)
    """
    if not (t_end_h > 0):
        raise ValueError(f"t_end_h must be > 0 (got {t_end_h}).")
    if not (dt_h > 0):
        raise ValueError(f"dt_h must be > 0 (got {dt_h}).")

    y0 = [float(bioavailability), 0.0]
    t_grid = np.arange(0.0, t_end_h + dt_h / 2, dt_h)

    def rhs(t, y):
        return one_compartment_first_order(t, y, ka_per_h, ke_per_h)

    sol = solve_ivp(rhs, t_span=(0.0, float(t_grid[-1])), y0=y0, method="RK45",
                    t_eval=t_grid, rtol=rtol, atol=atol)
    if not sol.success:
        raise RuntimeError(f"ODE integration failed: {sol.message}")

    C = np.maximum(sol.y[1], 0.0)
    return sol.t, C
