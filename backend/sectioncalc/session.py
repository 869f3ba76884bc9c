"""Calculator session: the current shape, entered text and saved results."""

from __future__ import annotations

import threading
from typing import Mapping

from .engine import compute
from .results import SavedResult, SectionResult
from .shapes import ParameterField, ShapeKind, parameter_fields, parse_parameters, shape_kind
from .store import ResultStore


class CalculatorSession:
    """State of one user's calculator.

    Entered text is kept per symbol and survives shape switches, so going
    back to a shape shows what was typed before. Reads and writes of the
    shape and entered text hold the session lock, so concurrent requests
    on one session see a consistent shape/text pair.
    """

    def __init__(self, shape: ShapeKind | str = ShapeKind.SOLID_CIRCLE) -> None:
        self.shape = shape_kind(shape)
        self._entered: dict[str, str] = {}
        self._lock = threading.RLock()
        self.store = ResultStore()

    def _snapshot(self) -> tuple[ShapeKind, dict[str, str]]:
        with self._lock:
            return self.shape, dict(self._entered)

    @property
    def fields(self) -> tuple[ParameterField, ...]:
        return parameter_fields(self.shape)

    @property
    def entered(self) -> dict[str, str]:
        """Entered text for the current shape's fields ("" when blank)."""
        shape, entered = self._snapshot()
        return {f.symbol: entered.get(f.symbol, "") for f in parameter_fields(shape)}

    @property
    def parameters(self) -> dict[str, float]:
        return parse_parameters(*self._snapshot())

    @property
    def result(self) -> SectionResult:
        return compute(*self._snapshot())

    def select_shape(self, shape: ShapeKind | str) -> None:
        kind = shape_kind(shape)
        with self._lock:
            self.shape = kind

    def set_parameter(self, symbol: str, text: str | float | None) -> None:
        with self._lock:
            self._entered[symbol] = "" if text is None else str(text)

    def update_parameters(self, values: Mapping[str, str | float | None]) -> None:
        with self._lock:
            for symbol, text in values.items():
                self.set_parameter(symbol, text)

    def save(self) -> SavedResult:
        return self.store.save(*self._snapshot())
