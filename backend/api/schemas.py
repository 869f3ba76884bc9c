"""Pydantic request/response models for the API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from sectioncalc import SavedResult, SectionResult, ShapeKind, format_value
from sectioncalc.results import RESULT_FIELDS

# Entered dimension text, or a number from non-form clients
ParameterValue = str | float | None


# ── Request Models ────────────────────────────────────────────


class ComputeRequest(BaseModel):
    shape: ShapeKind
    parameters: dict[str, ParameterValue] = {}  # symbol → entered value (mm)


class VerifyRequest(ComputeRequest):
    circle_segments: int = 64


class SessionCreateRequest(BaseModel):
    shape: ShapeKind = ShapeKind.SOLID_CIRCLE
    parameters: dict[str, ParameterValue] = {}


class ShapeSelectRequest(BaseModel):
    shape: ShapeKind


class ParametersUpdateRequest(BaseModel):
    parameters: dict[str, ParameterValue]


# ── Response Models ───────────────────────────────────────────


class ParameterFieldOutput(BaseModel):
    symbol: str
    label: str
    tooltip: str


class ShapeInfo(BaseModel):
    shape: ShapeKind
    name: str
    parameters: list[ParameterFieldOutput]
    equations: list[str]  # LaTeX


class SectionResultOutput(BaseModel):
    A: float    # mm²
    xc: float   # mm
    yc: float   # mm
    Ix: float   # mm⁴
    Iy: float   # mm⁴
    Zx: float   # mm³
    Zy: float   # mm³
    Sx: float   # mm³
    Sy: float   # mm³
    rx: float   # mm
    ry: float   # mm

    @classmethod
    def from_result(cls, result: SectionResult) -> SectionResultOutput:
        return cls(**result.as_dict())


def formatted(result: SectionResult) -> dict[str, str]:
    return {name: format_value(getattr(result, name)) for name in RESULT_FIELDS}


class ComputeOutput(BaseModel):
    shape: ShapeKind
    parameters: dict[str, float]
    result: SectionResultOutput
    formatted: dict[str, str]  # 3 significant figures, as displayed/exported


class SavedResultOutput(BaseModel):
    id: str
    shape: ShapeKind
    timestamp: datetime
    parameters: dict[str, float]
    result: SectionResultOutput
    formatted: dict[str, str]

    @classmethod
    def from_saved(cls, saved: SavedResult) -> SavedResultOutput:
        return cls(
            id=saved.id,
            shape=saved.shape,
            timestamp=saved.timestamp,
            parameters=dict(saved.parameters),
            result=SectionResultOutput.from_result(saved.result),
            formatted=formatted(saved.result),
        )


class SessionOutput(BaseModel):
    session_id: str
    shape: ShapeKind
    parameters: dict[str, str]  # entered text for the current shape
    current: ComputeOutput
    saved_count: int
    can_export: bool


class VerificationOutput(BaseModel):
    shape: ShapeKind
    parameters: dict[str, float]
    closed_form: SectionResultOutput
    mesh: SectionResultOutput
    relative_differences: dict[str, float]
    element_count: int
    warnings: list[str] = []
