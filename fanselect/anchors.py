"""
Frozen anchor set for engine constants with brief origin notes.

These values document the intended catalog conventions and the defaults
used by the curve evaluator. Tests may assert no drift relative to these values.
Update this file deliberately when retuning, together with golden updates.
"""

ANCHORS: dict[str, float | int | str] = {
    # Air reference state of the catalog test rig
    "RHO_REF_KGM3": 1.2,            # kg/m^3, standard air for fan catalogs
    "SECONDS_PER_HOUR": 3600.0,

    # Curve evaluator
    "CURVE_DEGREE": 3,              # least-squares degree for tabulated curves
    "CURVE_POINTS": 50,             # samples per plotted curve
    "TORQUE_POINTS": 20,            # samples on the load torque curve

    # Motor matching
    "K_TORQUE": 9550.0,             # N*m per (kW/rpm)
    "K_DOUBLE_INERTIA": 2.0,        # double-suction impeller vs single wheel
    "INERTIA_EXPONENT": 5.0,        # J ~ D^5 for geometrically similar wheels

    # Selection
    "SPEED_BASIS": "rotational",     # rotational | specific
    "SPECIFIC_SPEED_EXPONENT": 0.75,
}

# Origins (free-text for docs)
ORIGINS: dict[str, str] = {
    "RHO_REF_KGM3": "Catalog curves measured at 1.2 kg/m³ (20°C, 101.3 kPa)",
    "CURVE_DEGREE": "Cubic reproduces single-peaked efficiency and falling pressure on catalog data",
    "K_TORQUE": "M = 60000/(2π) · N/n ≈ 9550 · N[kW]/n[rpm]",
    "K_DOUBLE_INERTIA": "Double-suction wheel modelled as two single wheels on one hub",
    "INERTIA_EXPONENT": "Mass ~ D^3, radius of gyration ~ D",
}
