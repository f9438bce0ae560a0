"""
Page Setup - page geometry model and printer validation.

This library turns a requested page (size, orientation and margins) into a
validated geometric description suitable for driving a printing pipeline.

Quick Start:
    >>> from page_setup import PageGeometry, Unit
    >>> geometry = PageGeometry.from_fields(8.5, 11, "portrait", (1, 1, 1, 1), Unit.INCH)
    >>> geometry.imageable_width
    468.0

Main Classes:
    - Unit: Inch, millimeter and point conversions
    - PaperCatalog: Named paper sizes, including the ISO A/B/C series
    - PageGeometry: Size, orientation and margins of a page
    - PrinterValidator: Check or adjust a geometry against a printer

Outcomes:
    - Accepted, Adjusted, Rejected

Capability Providers:
    - CapabilityProvider: Protocol the validator talks to
    - ProfileCapabilityProvider: Provider driven by printer profile files

Exceptions:
    - PageSetupError: Base exception
    - InvalidGeometryError: Negative or unusable page values
    - UnknownUnitError / UnknownOrientationError: Bad identifiers
    - PrinterCapabilityError / ProfileError: Provider failures
    - InvalidPDFError: Unreadable PDF

For CLI usage, use the 'page-setup' command after installation.
"""

# Core classes
from page_setup.units import Unit, convert, format_value, round_value
from page_setup.catalog import PaperCatalog, PaperCatalogEntry, iso_size
from page_setup.geometry import (
    FieldValues,
    Margins,
    Orientation,
    PageGeometry,
    PageSize,
    PhysicalPage,
    Rect,
    set_orientation,
    to_fields,
)
from page_setup.validation import ANY_PRINTER, PrinterValidator, dimensions_match

# Outcomes
from page_setup.types import Accepted, Adjusted, Rejected, RejectionKind, ValidationOutcome

# Capability providers
from page_setup.backends import CapabilityProvider, PrinterProfile, ProfileCapabilityProvider

# Exceptions
from page_setup.exceptions import (
    PageSetupError,
    InvalidGeometryError,
    UnknownUnitError,
    UnknownOrientationError,
    PrinterCapabilityError,
    ProfileError,
    InvalidPDFError,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "Unit",
    "convert",
    "format_value",
    "round_value",
    "PaperCatalog",
    "PaperCatalogEntry",
    "iso_size",
    "FieldValues",
    "Margins",
    "Orientation",
    "PageGeometry",
    "PageSize",
    "PhysicalPage",
    "Rect",
    "set_orientation",
    "to_fields",
    "ANY_PRINTER",
    "PrinterValidator",
    "dimensions_match",
    # Outcomes
    "Accepted",
    "Adjusted",
    "Rejected",
    "RejectionKind",
    "ValidationOutcome",
    # Capability providers
    "CapabilityProvider",
    "PrinterProfile",
    "ProfileCapabilityProvider",
    # Exceptions
    "PageSetupError",
    "InvalidGeometryError",
    "UnknownUnitError",
    "UnknownOrientationError",
    "PrinterCapabilityError",
    "ProfileError",
    "InvalidPDFError",
    # Version info
    "__version__",
]
