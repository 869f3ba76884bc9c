"""Closed-form section properties for the standard shapes.

Every shape has one pure formula function taking validated dimensions in mm.
``compute`` validates the entered dimensions and dispatches through
``_FORMULAS``. Bad dimensions never raise; they give the all-zero result.

Centroids are measured from the extreme left/bottom edge of the section, so a
solid circle of radius r has ``xc = yc = r``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping

from .results import SectionResult
from .shapes import ShapeKind, parse_dimension, required_symbols, shape_kind

logger = logging.getLogger(__name__)

_SQRT3 = math.sqrt(3)


def _gyration(I: float, A: float) -> float:
    """sqrt(I / A), or NaN when the ratio is negative or undefined."""
    ratio = I / A
    return math.sqrt(ratio) if ratio >= 0 else math.nan


# ── Per-shape formulas ────────────────────────────────────────


def _solid_circle(p: Mapping[str, float]) -> SectionResult:
    r = p["r"]
    I = math.pi * r**4 / 4
    Z = math.pi * r**3 / 4
    S = 4 * r**3 / 3
    return SectionResult(
        A=math.pi * r * r,
        xc=r, yc=r,
        Ix=I, Iy=I,
        Zx=Z, Zy=Z,
        Sx=S, Sy=S,
        rx=r / 2, ry=r / 2,
    )


def _circular_hollow(p: Mapping[str, float]) -> SectionResult:
    ro, ri = p["r_o"], p["r_i"]
    I = math.pi * (ro**4 - ri**4) / 4
    Z = I / ro
    S = 4 * (ro**3 - ri**3) / 3
    rg = 0.5 * math.sqrt(ro * ro + ri * ri)
    return SectionResult(
        A=math.pi * (ro * ro - ri * ri),
        xc=ro, yc=ro,
        Ix=I, Iy=I,
        Zx=Z, Zy=Z,
        Sx=S, Sy=S,
        rx=rg, ry=rg,
    )


def _solid_square(p: Mapping[str, float]) -> SectionResult:
    a = p["a"]
    I = a**4 / 12
    Z = a**3 / 6
    S = a**3 / 4
    rg = a / (2 * _SQRT3)
    return SectionResult(
        A=a * a,
        xc=a / 2, yc=a / 2,
        Ix=I, Iy=I,
        Zx=Z, Zy=Z,
        Sx=S, Sy=S,
        rx=rg, ry=rg,
    )


def _square_hollow(p: Mapping[str, float]) -> SectionResult:
    ao, ai = p["a_o"], p["a_i"]
    A = ao * ao - ai * ai
    I = (ao**4 - ai**4) / 12
    Z = I / (ao / 2)
    S = (ao**3 - ai**3) / 4
    rg = _gyration(I, A)
    return SectionResult(
        A=A,
        xc=ao / 2, yc=ao / 2,
        Ix=I, Iy=I,
        Zx=Z, Zy=Z,
        Sx=S, Sy=S,
        rx=rg, ry=rg,
    )


def _solid_rectangle(p: Mapping[str, float]) -> SectionResult:
    b, h = p["b"], p["h"]
    return SectionResult(
        A=b * h,
        xc=b / 2, yc=h / 2,
        Ix=b * h**3 / 12,
        Iy=b**3 * h / 12,
        Zx=b * h**2 / 6,
        Zy=b**2 * h / 6,
        Sx=b * h**2 / 4,
        Sy=b**2 * h / 4,
        rx=h / (2 * _SQRT3),
        ry=b / (2 * _SQRT3),
    )


def _rectangle_hollow(p: Mapping[str, float]) -> SectionResult:
    bo, ho, bi, hi = p["b_o"], p["h_o"], p["b_i"], p["h_i"]
    A = bo * ho - bi * hi
    Ix = (bo * ho**3 - bi * hi**3) / 12
    Iy = (bo**3 * ho - bi**3 * hi) / 12
    return SectionResult(
        A=A,
        xc=bo / 2, yc=ho / 2,
        Ix=Ix, Iy=Iy,
        Zx=Ix / (ho / 2),
        Zy=Iy / (bo / 2),
        Sx=(bo * ho**2 - bi * hi**2) / 4,
        Sy=(bo**2 * ho - bi**2 * hi) / 4,
        rx=_gyration(Ix, A),
        ry=_gyration(Iy, A),
    )


def _i_section(p: Mapping[str, float]) -> SectionResult:
    bf, tf, tw, D, d1 = p["b_f"], p["t_f"], p["t_w"], p["D"], p["d_1"]
    A = 2 * tf * bf + tw * d1
    Ix = (bf * D**3 - bf * d1**3 + tw * d1**3) / 12
    Iy = (2 * tf * bf**3 + d1 * tw**3) / 12
    return SectionResult(
        A=A,
        xc=bf / 2, yc=D / 2,
        Ix=Ix, Iy=Iy,
        Zx=Ix / (D / 2),
        Zy=Iy / (bf / 2),
        Sx=bf * tf * (D - tf) + tw * d1**2 / 4,
        Sy=tf * bf**2 / 2 + d1 * tw**2 / 4,
        rx=_gyration(Ix, A),
        ry=_gyration(Iy, A),
    )


_FORMULAS: dict[ShapeKind, Callable[[Mapping[str, float]], SectionResult]] = {
    ShapeKind.SOLID_CIRCLE: _solid_circle,
    ShapeKind.CIRCULAR_HOLLOW: _circular_hollow,
    ShapeKind.SOLID_SQUARE: _solid_square,
    ShapeKind.SQUARE_HOLLOW: _square_hollow,
    ShapeKind.SOLID_RECTANGLE: _solid_rectangle,
    ShapeKind.RECTANGLE_HOLLOW: _rectangle_hollow,
    ShapeKind.I_SECTION: _i_section,
}

# (inner, outer) pairs; inner must be strictly smaller
_INNER_OUTER: dict[ShapeKind, tuple[tuple[str, str], ...]] = {
    ShapeKind.CIRCULAR_HOLLOW: (("r_i", "r_o"),),
    ShapeKind.SQUARE_HOLLOW: (("a_i", "a_o"),),
    ShapeKind.RECTANGLE_HOLLOW: (("b_i", "b_o"), ("h_i", "h_o")),
}


# ── Public entry point ────────────────────────────────────────


def is_geometry_valid(shape: ShapeKind, params: Mapping[str, float]) -> bool:
    """Check inner dimensions of hollow shapes are below the outer ones."""
    return all(params[inner] < params[outer] for inner, outer in _INNER_OUTER.get(shape, ()))


def compute(shape: ShapeKind | str, params: Mapping[str, Any]) -> SectionResult:
    """Compute section properties for ``shape`` from entered dimensions.

    ``params`` maps symbols to numbers or entered text. Returns the all-zero
    result when a required dimension is missing, unreadable, non-finite,
    zero or negative, when a hollow section's inner dimension is not
    smaller than its outer one, or when the dimensions give a non-finite
    property (float overflow, or a negative second moment of area).
    """
    kind = shape_kind(shape)

    dims: dict[str, float] = {}
    for symbol in required_symbols(kind):
        value = parse_dimension(params.get(symbol))
        if not math.isfinite(value) or value <= 0:
            logger.debug("%s: %s=%r not usable, returning zero result", kind.value, symbol, params.get(symbol))
            return SectionResult.zero()
        dims[symbol] = value

    if not is_geometry_valid(kind, dims):
        logger.debug("%s: inner dimension not smaller than outer: %s", kind.value, dims)
        return SectionResult.zero()

    try:
        result = _FORMULAS[kind](dims)
    except (OverflowError, ZeroDivisionError):
        logger.debug("%s: dimensions out of float range: %s", kind.value, dims)
        return SectionResult.zero()

    # inf from overflowing products, NaN from negative I (e.g. I section with d_1 > D)
    if not all(math.isfinite(v) for v in result.as_dict().values()):
        logger.debug("%s: non-finite properties for %s, returning zero result", kind.value, dims)
        return SectionResult.zero()
    return result
