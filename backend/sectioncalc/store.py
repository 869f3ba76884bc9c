"""Append-only store of saved results and its CSV export."""

from __future__ import annotations

import csv
import io
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from .engine import compute
from .formatting import format_value
from .results import RESULT_FIELDS, SavedResult
from .shapes import ShapeKind, parse_parameters, shape_kind

logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, ...] = (
    "Section Type",
    "Timestamp",
    "Parameters",
    "Area (mm²)",
    "Centroid x (mm)",
    "Centroid y (mm)",
    "Ix (mm⁴)",
    "Iy (mm⁴)",
    "Zx (mm³)",
    "Zy (mm³)",
    "Sx (mm³)",
    "Sy (mm³)",
    "rx (mm)",
    "ry (mm)",
)

PARAMETER_SEPARATOR = "; "


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO 8601 with milliseconds, e.g. ``2024-05-01T09:30:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_filename(now: datetime | None = None) -> str:
    """``section-properties-<ISO 8601 timestamp>.csv``"""
    return f"section-properties-{iso_timestamp(now or datetime.now(timezone.utc))}.csv"


def parameters_cell(parameters: Mapping[str, float]) -> str:
    return PARAMETER_SEPARATOR.join(
        f"{symbol}={format_value(value)}" for symbol, value in parameters.items()
    )


def csv_row(saved: SavedResult) -> list[str]:
    return [
        saved.shape.value,
        iso_timestamp(saved.timestamp),
        parameters_cell(saved.parameters),
        *(format_value(getattr(saved.result, name)) for name in RESULT_FIELDS),
    ]


class ResultStore:
    """Saved results for one session, in save order.

    Entries are only ever appended; nothing is edited or removed. Appends
    and exports hold the store lock.
    """

    def __init__(self) -> None:
        self._results: list[SavedResult] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[SavedResult]:
        return iter(self.results)

    def __bool__(self) -> bool:
        return bool(self._results)

    @property
    def results(self) -> tuple[SavedResult, ...]:
        with self._lock:
            return tuple(self._results)

    def save(self, shape: ShapeKind | str, params: Mapping[str, Any]) -> SavedResult:
        """Compute and append one result for ``shape``.

        Only the shape's own parameters are kept, parsed, in schema order.
        """
        kind = shape_kind(shape)
        parameters = parse_parameters(kind, params)
        saved = SavedResult(
            id=uuid.uuid4().hex,
            shape=kind,
            timestamp=datetime.now(timezone.utc),
            parameters=parameters,
            result=compute(kind, parameters),
        )
        with self._lock:
            self._results.append(saved)
            count = len(self._results)
        logger.info("Saved %s result %s (%d in session)", kind.value, saved.id, count)
        return saved

    def export_csv(self) -> str | None:
        """Serialize all saved results as CSV text, or ``None`` when empty."""
        saved_results = self.results
        if not saved_results:
            return None

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for saved in saved_results:
            writer.writerow(csv_row(saved))
        logger.info("Exported %d saved results to CSV", len(saved_results))
        return buf.getvalue()
