"""Capability provider driven by static printer profiles.

A profile states the sheet sizes a printer accepts, the margins it cannot
print into and the orientations it supports. Profiles are usually kept in
a JSON file::

    {
      "version": 1,
      "default": "Office Laser",
      "printers": [
        {
          "name": "Office Laser",
          "unit": "mm",
          "paper": "A4",
          "width_range": [76, 216],
          "height_range": [127, 356],
          "min_margins": {"left": 4.2, "top": 4.2, "right": 4.2, "bottom": 4.2},
          "orientations": ["portrait", "landscape", "reverse-landscape"]
        }
      ]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..catalog import PaperCatalog
from ..exceptions import PrinterCapabilityError, ProfileError
from ..geometry import Margins, Orientation, PageGeometry, PageSize, PhysicalPage, Rect
from ..units import Unit

LOGGER = logging.getLogger("page_setup.backends.profile")

Range = Tuple[float, float]


def _clamp(value: float, bounds: Range) -> float:
    low, high = bounds
    return min(max(value, low), high)


@dataclass(frozen=True)
class PrinterProfile:
    """
    Capabilities of a single printer, in points.

    Attributes:
        name: Printer identity
        paper: Default sheet (portrait)
        width_range: Smallest and largest sheet width accepted
        height_range: Smallest and largest sheet height accepted
        min_margins: Unprintable borders of the unrotated sheet
        orientations: Orientations the driver supports
    """

    name: str
    paper: PageSize
    width_range: Range
    height_range: Range
    min_margins: Margins = field(default_factory=Margins)
    orientations: Tuple[Orientation, ...] = tuple(Orientation)

    def __post_init__(self) -> None:
        for label, (low, high) in (("width_range", self.width_range), ("height_range", self.height_range)):
            if low < 0 or high < low:
                raise ProfileError(f"Printer {self.name!r}: invalid {label} {low}-{high}")
        if not self.orientations:
            raise ProfileError(f"Printer {self.name!r}: no orientations supported")

    def supports(self, orientation: Orientation) -> bool:
        return orientation in self.orientations


class ProfileCapabilityProvider:
    """:class:`~page_setup.backends.base.CapabilityProvider` backed by :class:`PrinterProfile` objects."""

    VERSION = 1

    def __init__(self, profiles: Iterable[PrinterProfile], default: Optional[str] = None) -> None:
        self._profiles: Dict[str, PrinterProfile] = {}
        for profile in profiles:
            if profile.name in self._profiles:
                raise ProfileError(f"Duplicate printer profile: {profile.name!r}")
            self._profiles[profile.name] = profile

        if default is not None and default not in self._profiles:
            raise ProfileError(f"Default printer {default!r} has no profile")
        self._default = default if default is not None else next(iter(self._profiles), None)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: Union[str, Path], *, catalog: Optional[PaperCatalog] = None) -> "ProfileCapabilityProvider":
        """Read profiles from a JSON file.

        Raises:
            ProfileError: If the file cannot be read or is not a valid profile file.
        """

        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ProfileError(f"Unable to read printer profiles: {path}. Error: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ProfileError(f"Invalid JSON in printer profiles: {path}. Error: {exc}") from exc

        provider = cls.from_dict(data, catalog=catalog)
        LOGGER.debug("Loaded %s printer profile(s) from %s", len(provider.list_printers()), path)
        return provider

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, catalog: Optional[PaperCatalog] = None) -> "ProfileCapabilityProvider":
        if not isinstance(data, Mapping):
            raise ProfileError("Printer profiles must be a JSON object")
        version = data.get("version", 0)
        if version != cls.VERSION:
            raise ProfileError(f"Unsupported printer profile version: {version}")
        printers = data.get("printers")
        if not isinstance(printers, list):
            raise ProfileError("Printer profiles must contain a 'printers' list")

        catalog = catalog or PaperCatalog()
        profiles = [_profile_from_dict(item, catalog) for item in printers]
        return cls(profiles, default=data.get("default"))

    # ------------------------------------------------------------------
    # CapabilityProvider
    # ------------------------------------------------------------------
    @property
    def default_printer(self) -> Optional[str]:
        return self._default

    def profile(self, printer: Optional[str]) -> PrinterProfile:
        """Return the profile for *printer*, or for the default printer when ``None``."""

        name = printer if printer is not None else self._default
        if name is None:
            raise PrinterCapabilityError("No printers are configured")
        try:
            return self._profiles[name]
        except KeyError:
            raise PrinterCapabilityError(f'Unknown printer: "{name}"') from None

    def list_printers(self) -> List[str]:
        return list(self._profiles)

    def default_page(self, printer: Optional[str] = None) -> PageGeometry:
        profile = self.profile(printer)
        return PageGeometry(size=profile.paper, orientation=Orientation.PORTRAIT, margins=profile.min_margins)

    def validate_page(self, printer: Optional[str], geometry: PageGeometry) -> PageGeometry:
        """Clamp *geometry* to what *printer* can handle.

        Unsupported orientations fall back to portrait, the sheet is clamped
        into the accepted width and height ranges, and the imageable area is
        shrunk so it stays clear of the minimum margins. When nothing of the
        requested area survives, the whole printable area of the sheet is
        used instead.
        """

        profile = self.profile(printer)
        page = geometry.physical()
        if not profile.supports(page.orientation):
            LOGGER.debug("Printer %s does not support %s", profile.name, page.orientation.value)
            page = replace(page, orientation=Orientation.PORTRAIT)

        width = _clamp(page.width, profile.width_range)
        height = _clamp(page.height, profile.height_range)
        margins = profile.min_margins
        low_x, low_y = margins.left, margins.top
        high_x, high_y = width - margins.right, height - margins.bottom
        if high_x <= low_x or high_y <= low_y:
            raise PrinterCapabilityError(f'Printer "{profile.name}" margins leave no printable area')

        area = page.imageable
        x0, y0 = max(area.x, low_x), max(area.y, low_y)
        x1, y1 = min(area.right, high_x), min(area.bottom, high_y)
        if x1 <= x0 or y1 <= y0:
            x0, y0, x1, y1 = low_x, low_y, high_x, high_y

        adjusted = PhysicalPage(page.orientation, width, height, Rect(x0, y0, x1 - x0, y1 - y0))
        return PageGeometry.from_physical(adjusted)


def _paper_from_value(value: Any, unit: Unit, catalog: PaperCatalog) -> PageSize:
    if isinstance(value, str):
        entry = catalog.find(value)
        if entry is None:
            raise ProfileError(f"Unknown paper size in printer profile: {value!r}")
        return entry.size
    width, height = value
    return PageSize.from_unit(float(width), float(height), unit)


def _range_from_value(value: Any, unit: Unit) -> Range:
    low, high = value
    return unit.to_canonical(float(low)), unit.to_canonical(float(high))


def _profile_from_dict(item: Mapping[str, Any], catalog: PaperCatalog) -> PrinterProfile:
    try:
        unit = Unit.parse(item.get("unit", "mm"))
        margins = item.get("min_margins", {})
        orientations = item.get("orientations")
        return PrinterProfile(
            name=str(item["name"]),
            paper=_paper_from_value(item["paper"], unit, catalog),
            width_range=_range_from_value(item["width_range"], unit),
            height_range=_range_from_value(item["height_range"], unit),
            min_margins=Margins.from_unit(
                float(margins.get("left", 0)),
                float(margins.get("top", 0)),
                float(margins.get("right", 0)),
                float(margins.get("bottom", 0)),
                unit=unit,
            ),
            orientations=(
                tuple(Orientation.parse(value) for value in orientations)
                if orientations is not None
                else tuple(Orientation)
            ),
        )
    except KeyError as exc:
        raise ProfileError(f"Printer profile is missing key {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise ProfileError(f"Invalid printer profile {item!r}: {exc}") from exc
