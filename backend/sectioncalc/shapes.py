"""Section shapes: parameter schemas, display names and equation strings."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ShapeKind(str, Enum):
    """Supported cross-section shapes.

    Values are the tags used in saved results and CSV exports.
    """

    SOLID_CIRCLE = "solidCircle"
    CIRCULAR_HOLLOW = "circularHollow"
    SOLID_SQUARE = "solidSquare"
    SQUARE_HOLLOW = "squareHollow"
    SOLID_RECTANGLE = "solidRectangle"
    RECTANGLE_HOLLOW = "rectangleHollow"
    I_SECTION = "iSection"


@dataclass(frozen=True)
class ParameterField:
    """One dimension input of a shape (all dimensions in mm)."""

    symbol: str
    label: str
    tooltip: str


# ── Parameter schemas ─────────────────────────────────────────

PARAMETER_SCHEMAS: dict[ShapeKind, tuple[ParameterField, ...]] = {
    ShapeKind.SOLID_CIRCLE: (
        ParameterField("r", "Radius", "Radius of the circle"),
    ),
    ShapeKind.CIRCULAR_HOLLOW: (
        ParameterField("r_o", "Outer Radius", "Outer radius of the hollow section"),
        ParameterField("r_i", "Inner Radius", "Inner radius of the hollow section"),
    ),
    ShapeKind.SOLID_SQUARE: (
        ParameterField("a", "Width", "Width of the square section"),
    ),
    ShapeKind.SQUARE_HOLLOW: (
        ParameterField("a_o", "Outer Width", "Outer width of the hollow section"),
        ParameterField("a_i", "Inner Width", "Inner width of the hollow section"),
    ),
    ShapeKind.SOLID_RECTANGLE: (
        ParameterField("b", "Width", "Width of the rectangle"),
        ParameterField("h", "Height", "Height of the rectangle"),
    ),
    ShapeKind.RECTANGLE_HOLLOW: (
        ParameterField("b_o", "Outer Width", "Outer width of the hollow section"),
        ParameterField("h_o", "Outer Height", "Outer height of the hollow section"),
        ParameterField("b_i", "Inner Width", "Inner width of the hollow section"),
        ParameterField("h_i", "Inner Height", "Inner height of the hollow section"),
    ),
    ShapeKind.I_SECTION: (
        ParameterField("b_f", "Flange Width", "Width of the flange"),
        ParameterField("t_f", "Flange Thickness", "Thickness of the flange"),
        ParameterField("t_w", "Web Thickness", "Thickness of the web"),
        ParameterField("D", "Overall Depth", "Overall depth of the section"),
        ParameterField("d_1", "Clear Distance", "Clear distance between flanges"),
    ),
}

DISPLAY_NAMES: dict[ShapeKind, str] = {
    ShapeKind.SOLID_CIRCLE: "Solid Circle",
    ShapeKind.CIRCULAR_HOLLOW: "Circular Hollow Section",
    ShapeKind.SOLID_SQUARE: "Solid Square",
    ShapeKind.SQUARE_HOLLOW: "SHS with Sharp Edges",
    ShapeKind.SOLID_RECTANGLE: "Solid Rectangle",
    ShapeKind.RECTANGLE_HOLLOW: "RHS with Sharp Edges",
    ShapeKind.I_SECTION: "I Section",
}

# LaTeX, one equation per line of the form
EQUATIONS: dict[ShapeKind, tuple[str, ...]] = {
    ShapeKind.SOLID_CIRCLE: (
        r"A = \pi r^2",
        r"Z_x = Z_y = \pi r^3/4",
        r"S_x = S_y = 4r^3/3",
    ),
    ShapeKind.CIRCULAR_HOLLOW: (
        r"A = \pi(r_o^2 - r_i^2)",
        r"Z_x = Z_y = \pi(r_o^4 - r_i^4)/(4r_o)",
        r"S_x = S_y = 4(r_o^3 - r_i^3)/3",
    ),
    ShapeKind.SOLID_SQUARE: (
        r"A = a^2",
        r"Z_x = Z_y = a^3/6",
        r"S_x = S_y = a^3/4",
    ),
    ShapeKind.SQUARE_HOLLOW: (
        r"A = a_o^2 - a_i^2",
        r"Z_x = Z_y = (a_o^4 - a_i^4)/(6a_o)",
        r"S_x = S_y = (a_o^3 - a_i^3)/4",
    ),
    ShapeKind.SOLID_RECTANGLE: (
        r"A = bh",
        r"Z_x = bh^2/6",
        r"Z_y = b^2h/6",
        r"S_x = bh^2/4",
        r"S_y = b^2h/4",
    ),
    ShapeKind.RECTANGLE_HOLLOW: (
        r"A = b_oh_o - b_ih_i",
        r"Z_x = (b_oh_o^3 - b_ih_i^3)/(6h_o)",
        r"Z_y = (b_o^3h_o - b_i^3h_i)/(6b_o)",
        r"S_x = (b_oh_o^2 - b_ih_i^2)/4",
        r"S_y = (b_o^2h_o - b_i^2h_i)/4",
    ),
    ShapeKind.I_SECTION: (
        r"A = 2t_fb_f + t_wd_1",
        r"Z_x = (b_fD^3 - b_fd_1^3 + t_wd_1^3)/(6D)",
        r"Z_y = (2t_fb_f^3 + d_1t_w^3)/(6b_f)",
        r"S_x = b_ft_f(D-t_f) + t_wd_1^2/4",
        r"S_y = t_fb_f^2/2 + d_1t_w^2/4",
    ),
}


def shape_kind(value: ShapeKind | str) -> ShapeKind:
    """Resolve a shape tag (e.g. ``"iSection"``) to its ShapeKind."""
    try:
        return ShapeKind(value)
    except ValueError:
        raise ValueError(
            f"Unknown section type {value!r}. "
            f"Expected one of: {', '.join(k.value for k in ShapeKind)}"
        ) from None


def parameter_fields(shape: ShapeKind | str) -> tuple[ParameterField, ...]:
    return PARAMETER_SCHEMAS[shape_kind(shape)]


def required_symbols(shape: ShapeKind | str) -> list[str]:
    """Symbols that must be non-zero before a shape can be computed."""
    return [f.symbol for f in parameter_fields(shape)]


# ── Parsing ───────────────────────────────────────────────────

_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_dimension(value: Any) -> float:
    """Parse an entered dimension permissively.

    Numbers pass through. Text is trimmed and its leading number is read,
    so ``"12.5mm"`` gives 12.5. Anything unreadable (``None``, ``""``,
    ``"abc"``, NaN) gives 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int beyond float range; callers reject non-finite values
            return math.inf if value > 0 else -math.inf
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if match is None:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number):
        return 0.0
    return number


def parse_parameters(shape: ShapeKind | str, raw: Mapping[str, Any]) -> dict[str, float]:
    """Parse entered values for the symbols of ``shape``, in schema order."""
    return {symbol: parse_dimension(raw.get(symbol)) for symbol in required_symbols(shape)}
