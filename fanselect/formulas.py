# -----------------------------------------------------------------------------
# Fan laws and sizing relations used by the selection engine.
#
# - Unit conversions (m^3/h, m^3/s, rpm, rad/s)
# - Affinity laws: flow ~ n, pressure ~ rho*n^2, power ~ rho*n^3
# - Specific speed of a duty point (per inlet)
# - Impeller diameter from the design flow coefficient
# - Moment of inertia of a similar impeller, shaft torque, load torque curve
#
# Note: no fluid dynamics is solved here; all aerodynamics lives in the
# measured catalog coefficients.
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .calibration import (
    INERTIA_EXPONENT,
    K_TORQUE,
    RHO_REF_KGM3,
    SECONDS_PER_HOUR,
    SPECIFIC_SPEED_EXPONENT,
)

# -----------------------------------------------------------------------------
# 1) Unit conversions
# -----------------------------------------------------------------------------


def m3h_to_m3s(q_m3h: float) -> float:
    """m^3/h → m^3/s."""
    return q_m3h / SECONDS_PER_HOUR


def m3s_to_m3h(q_m3s: float) -> float:
    """m^3/s → m^3/h."""
    return q_m3s * SECONDS_PER_HOUR


def rpm_to_rad_s(n_rpm: float) -> float:
    """rev/min → rad/s."""
    return n_rpm * 2.0 * math.pi / 60.0


def flow_per_inlet(q_m3h: float, inlets: int) -> float:
    """Flow through one inlet of a single- (1) or double-suction (2) impeller."""
    if inlets not in (1, 2):
        raise ValueError("inlets must be 1 or 2")
    return q_m3h / inlets


# -----------------------------------------------------------------------------
# 2) Affinity laws
# -----------------------------------------------------------------------------


def speed_ratio(target_rpm: float, reference_rpm: float) -> float:
    """
    Affinity speed ratio r = n / n_ref.
    Args:
        target_rpm: requested speed [rpm]
        reference_rpm: calibration speed of the catalog curves [rpm] (>0)
    Returns:
        float: r
    """
    if not math.isfinite(reference_rpm) or reference_rpm <= 0:
        raise ValueError("reference_rpm > 0")
    return target_rpm / reference_rpm


def density_ratio(rho_kgm3: float, rho_ref_kgm3: float = RHO_REF_KGM3) -> float:
    """
    Density correction k = rho / rho_ref applied to pressure and power.
    Args:
        rho_kgm3: duty density [kg/m^3] (>0)
        rho_ref_kgm3: catalog density [kg/m^3] (>0)
    Returns:
        float: k
    """
    if rho_kgm3 <= 0 or rho_ref_kgm3 <= 0:
        raise ValueError("rho_kgm3, rho_ref_kgm3 > 0")
    return rho_kgm3 / rho_ref_kgm3


def affinity_coefficients(coeffs: Sequence[float], r: float, k: float, exponent: int) -> Tuple[float, ...]:
    """
    Rescale ascending polynomial coefficients of y(Q) so that
        y_t(Q) = k * r^exponent * y_0(Q / r)
    i.e. c_i' = k * r^(exponent - i) * c_i.
    exponent: 2 for pressure, 3 for power, 0 for efficiency (pass k=1).
    """
    if r <= 0:
        raise ValueError("r > 0")
    return tuple(k * c * r ** (exponent - i) for i, c in enumerate(coeffs))


# -----------------------------------------------------------------------------
# 3) Sizing
# -----------------------------------------------------------------------------


def specific_speed(n_rpm: float, q_inlet_m3h: float, p_pa: float, rho_kgm3: float,
                   rho_ref_kgm3: float = RHO_REF_KGM3) -> float:
    """
    Specific speed of a duty point (per inlet, pressure referred to catalog air):
        n_s = n * sqrt(Q_inlet[m^3/s]) / (p * rho_ref / rho)^0.75
    Args:
        n_rpm: rotational speed [rpm]
        q_inlet_m3h: flow through one inlet [m^3/h] (>0)
        p_pa: pressure of the duty point [Pa] (>0)
        rho_kgm3: duty density [kg/m^3] (>0)
    Returns:
        float: specific speed [-]
    """
    if q_inlet_m3h <= 0 or p_pa <= 0 or rho_kgm3 <= 0:
        raise ValueError("q_inlet_m3h, p_pa, rho_kgm3 > 0")
    p_ref = p_pa * rho_ref_kgm3 / rho_kgm3
    return n_rpm * math.sqrt(m3h_to_m3s(q_inlet_m3h)) / p_ref ** SPECIFIC_SPEED_EXPONENT


def impeller_diameter(q_inlet_m3h: float, n_rpm: float, flow_coefficient: float) -> float:
    """
    Outer impeller diameter [m] from the design flow coefficient phi:
        Q = phi * (pi*D^2/4) * (pi*D*n/60)  →  D = (240*Q / (pi^2 * n * phi))^(1/3)
    Args:
        q_inlet_m3h: flow through one inlet [m^3/h] (>0)
        n_rpm: rotational speed [rpm] (>0)
        flow_coefficient: phi of the aerodynamic scheme (>0)
    Returns:
        float: diameter [m]
    """
    if q_inlet_m3h <= 0 or n_rpm <= 0 or flow_coefficient <= 0:
        raise ValueError("q_inlet_m3h, n_rpm, flow_coefficient > 0")
    q_m3s = m3h_to_m3s(q_inlet_m3h)
    return (240.0 * q_m3s / (math.pi ** 2 * n_rpm * flow_coefficient)) ** (1.0 / 3.0)


def scaled_inertia(inertia_ref: float, diameter_m: float, diameter_ref_m: float) -> float:
    """
    Moment of inertia [kg*m^2] of a geometrically similar wheel:
        J = J_ref * (D / D_ref)^5
    """
    if inertia_ref < 0 or diameter_m <= 0 or diameter_ref_m <= 0:
        raise ValueError("inertia_ref >= 0; diameter_m, diameter_ref_m > 0")
    return inertia_ref * (diameter_m / diameter_ref_m) ** INERTIA_EXPONENT


# -----------------------------------------------------------------------------
# 4) Motor matching
# -----------------------------------------------------------------------------


def shaft_torque(power_kw: float, n_rpm: float) -> float:
    """Shaft torque [N*m]: M = 9550 * N[kW] / n[rpm]."""
    if n_rpm <= 0:
        raise ValueError("n_rpm > 0")
    return K_TORQUE * power_kw / n_rpm


def load_torque_curve(torque_nm: float, n_rpm: float, points: int) -> List[Tuple[float, float]]:
    """
    Fan load characteristic M(n') = M * (n'/n)^2 sampled on [0, n].
    Returns [(rpm, N*m), ...] with both ends included.
    """
    if n_rpm <= 0 or points < 2:
        raise ValueError("n_rpm > 0, points >= 2")
    out: List[Tuple[float, float]] = []
    for i in range(points):
        n_i = n_rpm * i / (points - 1)
        out.append((n_i, torque_nm * (n_i / n_rpm) ** 2))
    return out


def hydraulic_efficiency(p_pa: float, q_m3h: float, power_kw: float) -> float:
    """Total efficiency from pressure and shaft power: eta = p*Q / N."""
    if power_kw == 0:
        raise ValueError("power_kw != 0")
    return p_pa * m3h_to_m3s(q_m3h) / (power_kw * 1000.0)
