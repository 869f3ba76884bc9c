"""Result records for computed and saved section properties."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from .shapes import ShapeKind


@dataclass(frozen=True)
class SectionResult:
    """Geometric properties of a section.

    Units:
    - Area: mm²
    - Centroid, radii of gyration: mm
    - Second moments of area: mm⁴
    - Elastic (Z) and plastic (S) section moduli: mm³

    All fields are 0 when the inputs are incomplete or invalid.
    """

    A: float = 0.0    # mm² — cross-section area
    xc: float = 0.0   # mm  — centroid x, from the extreme left edge
    yc: float = 0.0   # mm  — centroid y, from the extreme bottom edge
    Ix: float = 0.0   # mm⁴ — 2nd moment of area about x
    Iy: float = 0.0   # mm⁴ — 2nd moment of area about y
    Zx: float = 0.0   # mm³ — elastic section modulus about x
    Zy: float = 0.0   # mm³ — elastic section modulus about y
    Sx: float = 0.0   # mm³ — plastic section modulus about x
    Sy: float = 0.0   # mm³ — plastic section modulus about y
    rx: float = 0.0   # mm  — radius of gyration about x
    ry: float = 0.0   # mm  — radius of gyration about y

    @classmethod
    def zero(cls) -> SectionResult:
        return cls()

    @property
    def is_zero(self) -> bool:
        return self == SectionResult()

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


# Order of the numeric columns in displays and exports
RESULT_FIELDS: tuple[str, ...] = (
    "A", "xc", "yc", "Ix", "Iy", "Zx", "Zy", "Sx", "Sy", "rx", "ry",
)


@dataclass(frozen=True)
class SavedResult:
    """A result the user chose to keep, with the inputs that produced it."""

    id: str
    shape: ShapeKind
    timestamp: datetime
    parameters: Mapping[str, float]
    result: SectionResult = field(default_factory=SectionResult)

    def __post_init__(self) -> None:
        # Freeze the parameter mapping so saved entries cannot drift
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
