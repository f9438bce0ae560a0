"""Catalog of named paper sizes.

The catalog ships with US, architectural, card, photo and other common
sizes plus the ISO A, B and C series, and accepts custom entries at
runtime. Entries are never changed or removed once added.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import COMPARISON_TOLERANCE
from .geometry import PageSize
from .units import Unit, format_value

LOGGER = logging.getLogger("page_setup.catalog")

# ISO 216/269 series constants in millimeters: the A0 long side is the
# 4th root of 2 meters, B0 the square root, C0 the 8th root of 8.
ISO_THETA = {
    "A": 1000 * 2 ** 0.25,
    "B": 1000 * 2 ** 0.5,
    "C": 1000 * 8 ** 0.125,
}
ISO_MAX_INDEX = 10

_IN = Unit.INCH
_MM = Unit.MILLIMETER

_US_SIZES: Sequence[Tuple[str, str, float, float, Unit]] = (
    ("US/ANSI", "Letter (ANSI A)", 8.5, 11, _IN),
    ("US/ANSI", "Legal", 8.5, 14, _IN),
    ("US/ANSI", "Tabloid/Ledger (ANSI B)", 11, 17, _IN),
    ("US/ANSI", "Executive", 7.25, 10.55, _IN),
    ("US/ANSI", "Government Letter", 8.5, 10.5, _IN),
    ("US/ANSI", "Government Legal (Oficio/Folio)", 8.5, 13, _IN),
    ("US/ANSI", "ANSI C", 17, 22, _IN),
    ("US/ANSI", "ANSI D", 22, 34, _IN),
    ("US/ANSI", "ANSI E", 34, 44, _IN),
    ("US/ANSI", "Half Letter (Statement/Stationery)", 5.5, 8.5, _IN),
    ("US/ANSI", "Junior Legal", 5, 6, _IN),
    ("US Envelope (Commercial)", "6-1/4", 6.0, 3.5, _IN),
    ("US Envelope (Commercial)", "6-3/4", 6.5, 3.625, _IN),
    ("US Envelope (Commercial)", "7", 6.75, 3.75, _IN),
    ("US Envelope (Commercial)", "7-3/4 (Monarch)", 7.5, 3.875, _IN),
    ("US Envelope (Commercial)", "8-5/8", 8.625, 3.625, _IN),
    ("US Envelope (Commercial)", "9", 8.875, 3.875, _IN),
    ("US Envelope (Commercial)", "10 (Common)", 9.5, 4.125, _IN),
    ("US Envelope (Commercial)", "11", 10.375, 4.5, _IN),
    ("US Envelope (Commercial)", "12", 11, 4.75, _IN),
    ("US Envelope (Commercial)", "14", 11.5, 5.0, _IN),
    ("US Envelope (Commercial)", "16", 12, 6.0, _IN),
    ("US Envelope (Announcement)", "A1", 3.625, 5.125, _IN),
    ("US Envelope (Announcement)", "A2 (Lady Grey)", 5.75, 4.375, _IN),
    ("US Envelope (Announcement)", "A4", 6.25, 4.25, _IN),
    ("US Envelope (Announcement)", "A6 (Thompson's Standard)", 6.5, 4.75, _IN),
    ("US Envelope (Announcement)", "A7 (Besselheim)", 7.25, 5.25, _IN),
    ("US Envelope (Announcement)", "A8 (Carr's)", 8.125, 5.5, _IN),
    ("US Envelope (Announcement)", "A9 (Diplomat)", 8.75, 5.75, _IN),
    ("US Envelope (Announcement)", "A10 (Willow)", 9.5, 6.0, _IN),
    ("US Envelope (Announcement)", "A Long", 8.875, 3.875, _IN),
    ("US Envelope (Catalog)", "1", 9.0, 6.0, _IN),
    ("US Envelope (Catalog)", "1-3/4", 9.5, 6.5, _IN),
    ("US Envelope (Catalog)", "3", 10.0, 7.0, _IN),
    ("US Envelope (Catalog)", "6", 10.5, 7.5, _IN),
    ("US Envelope (Catalog)", "8", 11.25, 8.25, _IN),
    ("US Envelope (Catalog)", "9-3/4", 11.25, 8.75, _IN),
    ("US Envelope (Catalog)", "10-1/2", 12.0, 9.0, _IN),
    ("US Envelope (Catalog)", "12-1/2", 12.5, 9.5, _IN),
    ("US Envelope (Catalog)", "13-1/2", 13, 10.0, _IN),
    ("US Envelope (Catalog)", "14-1/2", 14.5, 11.5, _IN),
    ("US Envelope (Catalog)", "15", 15.0, 10.0, _IN),
    ("US Envelope (Catalog)", "15-1/2", 15.5, 12.0, _IN),
    ("US Architectural", "Arch A", 9, 12.0, _IN),
    ("US Architectural", "Arch B", 12, 18.0, _IN),
    ("US Architectural", "Arch C", 18, 24.0, _IN),
    ("US Architectural", "Arch D", 24, 36.0, _IN),
    ("US Architectural", "Arch E", 36, 48.0, _IN),
    ("US Architectural", "Arch E1", 30, 42.0, _IN),
)

_OTHER_SIZES: Sequence[Tuple[str, str, float, float, Unit]] = (
    ("Card", "3x5 Index", 3, 5, _IN),
    ("Card", "4x6 Index", 4, 6, _IN),
    ("Card", "5x8 Index", 5, 8, _IN),
    ("Card", "International Business", 53.98, 85.6, _MM),
    ("Card", "US Business", 2, 3.5, _IN),
    ("Card", "Japanese Business", 50, 90, _MM),
    ("Photo", "3x5", 3, 5, _IN),
    ("Photo", "4x6", 4, 6, _IN),
    ("Photo", "5x7", 5, 7, _IN),
    ("Photo", "6x8", 6, 8, _IN),
    ("Photo", "8x10", 8, 10, _IN),
    ("Photo", "8x12", 8, 12, _IN),
    ("Photo", "11x14", 11, 14, _IN),
    ("Other", "ISO DL Envelope", 220.0, 110.0, _MM),
    ("Other", "JIS B4", 257.0, 364.0, _MM),
    ("Other", "JIS B5", 182.0, 257.0, _MM),
    ("Other", "F4", 210.0, 330.0, _MM),
)


def _round_mm(value: float) -> float:
    return float(math.floor(value + 0.5))


def iso_size(series: str, index: int) -> Tuple[float, float]:
    """Return ``(width, height)`` in millimeters of ISO size ``<series><index>``.

    Width and height are each rounded to the nearest millimeter on their
    own, which reproduces the published ISO 216 and ISO 269 tables.
    """

    try:
        theta = ISO_THETA[series.upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown ISO series: {series!r}") from exc
    if index < 0:
        raise ValueError(f"ISO size index must be >= 0: {index}")
    width = _round_mm(theta * 2.0 ** (-(index + 1) / 2.0))
    height = _round_mm(theta * 2.0 ** (-index / 2.0))
    return width, height


def iso_series(max_index: int = ISO_MAX_INDEX) -> Iterator[Tuple[str, str, float, float, Unit]]:
    """Yield catalog rows for A0..A10, B0..B10 and C0..C10, interleaved by index."""

    for index in range(max_index + 1):
        for series in ISO_THETA:
            width, height = iso_size(series, index)
            yield f"ISO {series}", f"{series}{index}", width, height, _MM


@dataclass(frozen=True)
class PaperCatalogEntry:
    """
    A named paper size.

    Attributes:
        category: Group the entry is listed under
        name: Display name
        size: Size in points
        unit: Unit the size was defined in
        dimension_label: Size in its own unit, e.g. "8.5 x 11 in"
    """

    category: str
    name: str
    size: PageSize
    unit: Unit
    dimension_label: str

    @classmethod
    def create(cls, category: str, name: str, width: float, height: float, unit: Unit) -> "PaperCatalogEntry":
        unit = Unit.parse(unit)
        label = f"{format_value(width, unit)} x {format_value(height, unit)} {unit.abbr}"
        return cls(
            category=category,
            name=name,
            size=PageSize.from_unit(width, height, unit),
            unit=unit,
            dimension_label=label,
        )

    def __str__(self) -> str:
        return self.name


class PaperCatalog:
    """Append-only registry of named paper sizes.

    ``add`` and ``all`` share a lock, so a snapshot never sees a
    half-registered entry and concurrent adds are never lost.
    """

    def __init__(self, *, builtins: bool = True) -> None:
        self._lock = threading.Lock()
        self._entries: List[PaperCatalogEntry] = []
        self._initialized = False
        if builtins:
            self.initialize()

    def initialize(self) -> None:
        """Register the built-in sizes. Later calls do nothing."""

        with self._lock:
            if self._initialized:
                return
            rows = list(_US_SIZES) + list(iso_series()) + list(_OTHER_SIZES)
            for category, name, width, height, unit in rows:
                entry = PaperCatalogEntry.create(category, name, width, height, unit)
                if entry not in self._entries:
                    self._entries.append(entry)
            self._initialized = True
            LOGGER.debug("Registered %s built-in paper sizes", len(rows))

    def add(self, category: str, name: str, width: float, height: float, unit: Unit) -> bool:
        """Register a custom paper size.

        Args:
            category: Category to list the entry under; may match an
                existing category to group with it
            name: Display name
            width: Width in *unit*
            height: Height in *unit*
            unit: Unit of *width* and *height*

        Returns:
            ``True`` if the entry was added, ``False`` if an identical
            entry (category, name, size and unit) already exists.
        """

        entry = PaperCatalogEntry.create(category, name, width, height, unit)
        with self._lock:
            if entry in self._entries:
                LOGGER.debug("Paper size %s/%s already registered", category, name)
                return False
            self._entries.append(entry)
        LOGGER.debug("Registered paper size %s/%s (%s)", category, name, entry.dimension_label)
        return True

    def all(self) -> Tuple[PaperCatalogEntry, ...]:
        """Snapshot of all entries in insertion order."""

        with self._lock:
            return tuple(self._entries)

    def categories(self) -> List[str]:
        """Category names in the order they first appear."""

        seen: List[str] = []
        for entry in self.all():
            if entry.category not in seen:
                seen.append(entry.category)
        return seen

    def by_category(self, category: str) -> List[PaperCatalogEntry]:
        return [entry for entry in self.all() if entry.category == category]

    def find(self, name: str, category: Optional[str] = None) -> Optional[PaperCatalogEntry]:
        """Return the entry called *name* (case-insensitive), optionally within *category*.

        A name also matches without its parenthesized suffix, so "Letter"
        finds "Letter (ANSI A)". Without a category, ISO sizes win over
        same-named entries: "A4" is the ISO sheet, not the A4 envelope.
        """

        key = name.strip().lower()
        matches = [
            entry
            for entry in self.all()
            if key in _lookup_names(entry) and (category is None or entry.category == category)
        ]
        if not matches:
            return None
        for entry in matches:
            if entry.category.startswith("ISO "):
                return entry
        return matches[0]

    def match(self, size: PageSize, tolerance: float = COMPARISON_TOLERANCE) -> Optional[PaperCatalogEntry]:
        """Return the first entry whose size equals *size* in either orientation."""

        for entry in self.all():
            candidate = entry.size
            if _same(candidate, size, tolerance) or _same(candidate.rotated(), size, tolerance):
                return entry
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[PaperCatalogEntry]:
        return iter(self.all())


def _lookup_names(entry: PaperCatalogEntry) -> Tuple[str, str]:
    full = entry.name.lower()
    return full, full.split(" (", 1)[0]


def _same(a: PageSize, b: PageSize, tolerance: float) -> bool:
    return abs(a.width - b.width) < tolerance and abs(a.height - b.height) < tolerance
