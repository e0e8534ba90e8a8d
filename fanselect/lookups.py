"""
Code tables of the technical proposal.

Request fields carry small integer codes; these dictionaries map them to
report labels. Unknown codes fall back to the table's default entry.
"""
from __future__ import annotations

from typing import Dict, Optional

# Material design: label and the suffix appended to the fan designation
MATERIAL_DESIGN: Dict[int, str] = {
    1: "Corrosion-resistant",
    2: "Explosion-proof",
    3: "Explosion-proof corrosion-resistant",
    4: "Titanium",
    5: "General industrial",
}
MATERIAL_SUFFIX: Dict[int, Optional[str]] = {
    1: "К1",
    2: "В",
    3: "ВК1",
    4: "Ti",
    5: None,
}

COUPLING: Dict[int, str] = {
    1: "not provided",
    2: "elastic sleeve-pin (MUVP)",
    3: "disc",
    4: "laminated",
}

BEARING_UNIT: Dict[int, str] = {
    1: "not provided",
    2: "standard welded, oil bath, liquid oil",
    3: "cast, oil bath, liquid oil",
    4: "SKF type, separate bearing housings, grease",
    5: "SKF type, separate bearing housings, liquid oil",
    6: "sleeve bearings with forced lubrication from an oil station",
}

SHAFT_SEAL: Dict[int, str] = {
    1: "not provided",
    2: "felt",
    3: "silicone",
    4: "gland packing",
    5: "gas-tight lip seal",
    6: "graphite",
    7: "cartridge mechanical seal",
}


def label(table: Dict[int, str], code: int, default: int = 1) -> str:
    """Label for `code`; unknown codes map to the `default` entry."""
    return table.get(code, table[default])


def material_label(code: int) -> str:
    return label(MATERIAL_DESIGN, code, default=5)


def material_suffix(code: int) -> str:
    """Designation suffix for a material design code ("" for general industrial)."""
    return MATERIAL_SUFFIX.get(code) or ""


def provided(flag: bool) -> str:
    return "provided" if flag else "not provided"
