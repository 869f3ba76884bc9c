"""sectioncalc — closed-form properties of standard cross-sections."""

from .engine import compute
from .formatting import format_value
from .results import RESULT_FIELDS, SavedResult, SectionResult
from .session import CalculatorSession
from .shapes import (
    DISPLAY_NAMES,
    EQUATIONS,
    PARAMETER_SCHEMAS,
    ParameterField,
    ShapeKind,
    parameter_fields,
    parse_dimension,
    parse_parameters,
    required_symbols,
)
from .store import CSV_HEADER, ResultStore, export_filename

__all__ = [
    "CSV_HEADER",
    "CalculatorSession",
    "DISPLAY_NAMES",
    "EQUATIONS",
    "PARAMETER_SCHEMAS",
    "ParameterField",
    "RESULT_FIELDS",
    "ResultStore",
    "SavedResult",
    "SectionResult",
    "ShapeKind",
    "compute",
    "export_filename",
    "format_value",
    "parameter_fields",
    "parse_dimension",
    "parse_parameters",
    "required_symbols",
]
