"""Finite-element cross-check of the closed-form properties using sectionproperties."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from sectionproperties.analysis.section import Section
from sectionproperties.pre.library.primitive_sections import circular_section, rectangular_section

from .engine import compute
from .results import RESULT_FIELDS, SectionResult
from .shapes import ShapeKind, parse_parameters, shape_kind

logger = logging.getLogger(__name__)

DEFAULT_CIRCLE_SEGMENTS = 64
DEFAULT_MESH_DIVISIONS = 400  # max element area = A / DEFAULT_MESH_DIVISIONS


@dataclass
class VerificationResult:
    """Closed-form and mesh-based properties for the same section."""

    shape: ShapeKind
    parameters: dict[str, float]
    closed_form: SectionResult
    mesh: SectionResult
    element_count: int
    warnings: list[str] = field(default_factory=list)

    def relative_differences(self) -> dict[str, float]:
        """|mesh - closed form| / |closed form| for every non-zero property."""
        diffs: dict[str, float] = {}
        for name in RESULT_FIELDS:
            exact = getattr(self.closed_form, name)
            if exact == 0:
                continue
            diffs[name] = abs(getattr(self.mesh, name) - exact) / abs(exact)
        return diffs


# ── Geometry builders (bottom-left of bounding box at origin) ─


def _circle(radius: float, n: int):
    return circular_section(d=2 * radius, n=n)


def _build_geometry(kind: ShapeKind, p: Mapping[str, float], n: int):
    if kind == ShapeKind.SOLID_CIRCLE:
        r = p["r"]
        return _circle(r, n).shift_section(x_offset=r, y_offset=r)
    if kind == ShapeKind.CIRCULAR_HOLLOW:
        ro, ri = p["r_o"], p["r_i"]
        return (_circle(ro, n) - _circle(ri, n)).shift_section(x_offset=ro, y_offset=ro)
    if kind == ShapeKind.SOLID_SQUARE:
        return rectangular_section(d=p["a"], b=p["a"])
    if kind == ShapeKind.SQUARE_HOLLOW:
        ao, ai = p["a_o"], p["a_i"]
        inner = rectangular_section(d=ai, b=ai).shift_section(
            x_offset=(ao - ai) / 2, y_offset=(ao - ai) / 2
        )
        return rectangular_section(d=ao, b=ao) - inner
    if kind == ShapeKind.SOLID_RECTANGLE:
        return rectangular_section(d=p["h"], b=p["b"])
    if kind == ShapeKind.RECTANGLE_HOLLOW:
        bo, ho, bi, hi = p["b_o"], p["h_o"], p["b_i"], p["h_i"]
        inner = rectangular_section(d=hi, b=bi).shift_section(
            x_offset=(bo - bi) / 2, y_offset=(ho - hi) / 2
        )
        return rectangular_section(d=ho, b=bo) - inner
    if kind == ShapeKind.I_SECTION:
        bf, tf, tw, D, d1 = p["b_f"], p["t_f"], p["t_w"], p["D"], p["d_1"]
        if d1 > D - 2 * tf or tw > bf:
            raise ValueError(
                "I section must satisfy d_1 <= D - 2*t_f and t_w <= b_f to be meshed"
            )
        bottom = rectangular_section(d=tf, b=bf)
        top = rectangular_section(d=tf, b=bf).shift_section(y_offset=D - tf)
        web = rectangular_section(d=d1, b=tw).shift_section(
            x_offset=(bf - tw) / 2, y_offset=(D - d1) / 2
        )
        return bottom + web + top
    raise ValueError(f"No geometry builder for {kind.value!r}")


# ── Public entry point ────────────────────────────────────────


def verify(
    shape: ShapeKind | str,
    params: Mapping[str, Any],
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
) -> VerificationResult:
    """Mesh the section and compare against ``compute``.

    Raises ``ValueError`` when the dimensions do not describe a valid
    section (the closed-form result is the all-zero default).
    """
    kind = shape_kind(shape)
    parameters = parse_parameters(kind, params)
    closed_form = compute(kind, parameters)
    if closed_form.is_zero:
        raise ValueError(
            f"Dimensions {parameters} do not describe a valid {kind.value} section"
        )

    geom = _build_geometry(kind, parameters, circle_segments)
    geom.create_mesh(mesh_sizes=closed_form.A / DEFAULT_MESH_DIVISIONS)

    section = Section(geometry=geom)
    section.calculate_geometric_properties()

    warnings: list[str] = []
    sxx = syy = 0.0
    try:
        section.calculate_plastic_properties()
        sxx, syy = section.get_s()
    except Exception:
        warnings.append("Plastic section moduli could not be computed for this geometry.")

    area = float(section.get_area())
    cx, cy = section.get_c()
    ixx, iyy, _ = section.get_ic()
    zxx_plus, zxx_minus, zyy_plus, zyy_minus = section.get_z()
    rx, ry = section.get_rc()

    mesh = SectionResult(
        A=area,
        xc=float(cx),
        yc=float(cy),
        Ix=float(ixx),
        Iy=float(iyy),
        Zx=float(min(zxx_plus, zxx_minus)),
        Zy=float(min(zyy_plus, zyy_minus)),
        Sx=float(sxx),
        Sy=float(syy),
        rx=float(rx),
        ry=float(ry),
    )
    result = VerificationResult(
        shape=kind,
        parameters=parameters,
        closed_form=closed_form,
        mesh=mesh,
        element_count=len(section.elements),
        warnings=warnings,
    )
    logger.info(
        "Verified %s with %d elements, max relative difference %.3g",
        kind.value,
        result.element_count,
        max(result.relative_differences().values(), default=0.0),
    )
    return result
