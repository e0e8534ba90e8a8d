"""Centrifugal fan selection and duty-point performance from catalog data."""
from .analysis import compute_performance
from .calibration import DEFAULT_SETTINGS, EngineSettings
from .models import (
    CatalogRow,
    DutyPointRequest,
    Failure,
    PerformanceResult,
    ReportFields,
    SuctionType,
)

__all__ = [
    "compute_performance",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "CatalogRow",
    "DutyPointRequest",
    "Failure",
    "PerformanceResult",
    "ReportFields",
    "SuctionType",
]
