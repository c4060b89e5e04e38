# src/neurocurve/models/one_compartment.py
import numpy as np

# Below this |ka - ke| the Bateman prefactor ka / (ka - ke) blows up and the
# equal-rates limit is used instead.
DEGENERATE_RATE_GAP = 1e-3


def bateman(t, ka: float, ke: float, F: float = 1.0) -> np.ndarray:
    """
    Unnormalized one-compartment, first-order absorption curve.

      C(t) = F * ka / (ka - ke) * (exp(-ke t) - exp(-ka t))

    With ka ~= ke the equal-rates limit C(t) = F * k * t * exp(-k t),
    k = (ka + ke) / 2, is returned instead. Negative times give 0.

    t  : hours since dose (scalar or array)
    ka : absorption rate constant (1/h)
    ke : elimination rate constant (1/h)
    F  : bioavailability
    """
    t = np.asarray(t, dtype=float)
    tc = np.maximum(t, 0.0)
    if abs(ka - ke) < DEGENERATE_RATE_GAP:
        k = (ka + ke) / 2.0
        C = F * k * tc * np.exp(-k * tc)
    else:
        C = F * (ka / (ka - ke)) * (np.exp(-ke * tc) - np.exp(-ka * tc))
    return np.where(t < 0.0, 0.0, C)


def bateman_peak_time(ka: float, ke: float) -> float:
    """Time of the analytic maximum: ln(ka/ke) / (ka - ke), or 1/k in the limit."""
    if abs(ka - ke) < DEGENERATE_RATE_GAP:
        return 2.0 / (ka + ke)
    return float(np.log(ka / ke) / (ka - ke))


def one_compartment_first_order(t, y, ka, ke):
    """
    One-compartment model with first-order absorption and elimination.
    Two states:
      y[0] = amount in absorption depot
      y[1] = amount in central compartment

    Parameters:
      t  : current time (h), unused (autonomous system)
      y  : current state vector [A_depot, A_central]
      ka : absorption rate constant (1/h)
      ke : elimination rate constant (1/h)
    """
    A_depot, A_c = y
    dA_depot_dt = -ka * A_depot
    dA_c_dt = ka * A_depot - ke * A_c
    return [dA_depot_dt, dA_c_dt]
