"""
Polynomial performance curves: fitting, evaluation and sampling.

Curves are ascending coefficients in flow [m^3/h]. Fitting is done on flow
normalised to the largest sample so that high powers of Q (1e5..1e6 m^3/h)
stay well conditioned; coefficients are converted back to physical units.
Evaluation never clamps to the calibrated range.
"""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np
from numpy.polynomial import polynomial as P

from . import formulas as F
from .models import DutyPoint, NumericDegenerate, ScaledCurves

Points = List[Tuple[float, float]]


def fit_polynomial(points: Sequence[Tuple[float, float]], degree: int) -> Tuple[float, ...]:
    """Least-squares polynomial through tabulated (flow, value) points.

    The degree is lowered to len(points) - 1 when there are too few points.
    """
    if len(points) < 2:
        raise ValueError("at least 2 points are needed to fit a curve")
    q = np.asarray([p[0] for p in points], dtype=float)
    y = np.asarray([p[1] for p in points], dtype=float)
    scale = float(np.max(np.abs(q)))
    if scale == 0.0:
        raise ValueError("flow samples must not all be zero")
    deg = min(int(degree), len(points) - 1)
    c_norm = P.polyfit(q / scale, y, deg)
    return tuple(float(c) / scale ** i for i, c in enumerate(c_norm))


def polyval(coeffs: Sequence[float], q: float) -> float:
    return float(P.polyval(q, np.asarray(coeffs, dtype=float)))


def evaluate(scaled: ScaledCurves, flow: float) -> DutyPoint:
    """Pressure [Pa], power [kW] and efficiency [-] at one flow [m^3/h]."""
    pressure = polyval(scaled.pressure, flow)
    power = polyval(scaled.power, flow)
    if scaled.efficiency:
        efficiency = polyval(scaled.efficiency, flow)
    else:
        efficiency = _derived_efficiency(pressure, flow, power)
    point = DutyPoint(pressure=pressure, power=power, efficiency=efficiency)
    if not all(math.isfinite(v) for v in (point.pressure, point.power, point.efficiency)):
        raise NumericDegenerate(f"non-finite duty point at Q={flow}: {point}")
    return point


def _derived_efficiency(pressure: float, flow: float, power: float) -> float:
    try:
        return F.hydraulic_efficiency(pressure, flow, power)
    except ValueError as e:
        raise NumericDegenerate(f"efficiency undefined at Q={flow}: zero power") from e


def flow_grid(flow_min: float, flow_max: float, n: int) -> List[float]:
    """n evenly spaced flows on [flow_min, flow_max], both ends included."""
    if n < 2:
        raise ValueError("n >= 2")
    return [float(q) for q in np.linspace(flow_min, flow_max, n)]


def plot_range(scaled: ScaledCurves, duty_flow: float) -> Tuple[float, float]:
    """Scaled calibrated range, widened to include the duty flow."""
    return min(scaled.flow_min, duty_flow), max(scaled.flow_max, duty_flow)


def sample(scaled: ScaledCurves, flow_range: Tuple[float, float], n: int) -> Tuple[Points, Points]:
    """Pressure and power curves as ordered (flow, value) samples."""
    grid = flow_grid(flow_range[0], flow_range[1], n)
    pressure = [(q, polyval(scaled.pressure, q)) for q in grid]
    power = [(q, polyval(scaled.power, q)) for q in grid]
    return pressure, power


def sample_efficiency(scaled: ScaledCurves, flow_range: Tuple[float, float], n: int) -> Points:
    """Efficiency samples; skips flows where a derived efficiency is undefined."""
    out: Points = []
    for q in flow_grid(flow_range[0], flow_range[1], n):
        if scaled.efficiency:
            out.append((q, polyval(scaled.efficiency, q)))
            continue
        power = polyval(scaled.power, q)
        if power != 0:
            out.append((q, F.hydraulic_efficiency(polyval(scaled.pressure, q), q, power)))
    return out
