"""
Affinity scaling of catalog curves to the requested speed and density.

Flow scales with r = n / n_ref, pressure with k*r^2 and power with k*r^3
(k = rho / rho_ref). Efficiency is speed-invariant under ideal affinity and
passes through unscaled. Accuracy far outside r = 0.5..2.0 is not guaranteed.
"""
from __future__ import annotations

import math

from . import formulas as F
from .models import CatalogRow, NumericDegenerate, ScaledCurves


def scale(row: CatalogRow, target_speed: float, density: float | None = None) -> ScaledCurves:
    """Curves of `row` valid at `target_speed` [rpm] and `density` [kg/m^3].

    density=None keeps the catalog reference density (k = 1).
    Raises NumericDegenerate for a zero/negative reference speed or a
    non-positive ratio.
    """
    try:
        r = F.speed_ratio(target_speed, row.reference_speed)
        k = 1.0 if density is None else F.density_ratio(density, row.reference_density)
    except ValueError as e:
        raise NumericDegenerate(f"cannot scale row {row.impeller_mark!r}: {e}") from e
    if not math.isfinite(r) or r <= 0:
        raise NumericDegenerate(f"speed ratio {r} for row {row.impeller_mark!r}")

    return ScaledCurves(
        pressure=F.affinity_coefficients(row.pressure, r, k, 2),
        power=F.affinity_coefficients(row.power, r, k, 3),
        efficiency=F.affinity_coefficients(row.efficiency, r, 1.0, 0),
        flow_min=row.flow_min * r,
        flow_max=row.flow_max * r,
        speed_ratio=r,
        density_ratio=k,
    )
