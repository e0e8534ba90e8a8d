"""
Centralized engine constants and settings for fan selection.

Values are sourced from anchors.ANCHORS to keep the catalog conventions in
one place. Update anchors.py deliberately when retuning and adjust golden tests accordingly.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .anchors import ANCHORS

SpeedBasis = Literal["rotational", "specific"]

# --- Catalog reference state ---
# Density the catalog curves were measured at
RHO_REF_KGM3: float = float(ANCHORS["RHO_REF_KGM3"])  # [kg/m^3]
SECONDS_PER_HOUR: float = float(ANCHORS["SECONDS_PER_HOUR"])

# --- Curve evaluator defaults ---
CURVE_DEGREE: int = int(ANCHORS["CURVE_DEGREE"])
CURVE_POINTS: int = int(ANCHORS["CURVE_POINTS"])
TORQUE_POINTS: int = int(ANCHORS["TORQUE_POINTS"])

# --- Motor matching ---
# Shaft torque: M[N*m] = K_TORQUE * N[kW] / n[rpm]
K_TORQUE: float = float(ANCHORS["K_TORQUE"])
# Inertia of a double-suction wheel relative to a single wheel of equal diameter
K_DOUBLE_INERTIA: float = float(ANCHORS["K_DOUBLE_INERTIA"])
INERTIA_EXPONENT: float = float(ANCHORS["INERTIA_EXPONENT"])

# --- Selection ---
SPEED_BASIS: str = str(ANCHORS["SPEED_BASIS"])
SPECIFIC_SPEED_EXPONENT: float = float(ANCHORS["SPECIFIC_SPEED_EXPONENT"])


@dataclass(frozen=True)
class EngineSettings:
    """Tunable knobs of one computation.

    - curve_degree: polynomial degree used when fitting tabulated catalog curves
    - curve_points: samples per pressure/power/efficiency curve
    - torque_points: samples on the load torque curve
    - speed_basis: "rotational" matches catalog intervals on rpm,
      "specific" on the specific speed of the duty point
    """

    curve_degree: int = CURVE_DEGREE
    curve_points: int = CURVE_POINTS
    torque_points: int = TORQUE_POINTS
    speed_basis: SpeedBasis = SPEED_BASIS  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.curve_degree < 1:
            raise ValueError("curve_degree >= 1")
        if self.curve_points < 2 or self.torque_points < 2:
            raise ValueError("curve_points, torque_points >= 2")
        if self.speed_basis not in ("rotational", "specific"):
            raise ValueError("speed_basis must be 'rotational' or 'specific'")

    def with_overrides(self, **kwargs) -> "EngineSettings":
        """Return a copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


DEFAULT_SETTINGS = EngineSettings()
