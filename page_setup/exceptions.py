"""
Custom exceptions for Page Setup.

This module defines all custom exceptions used throughout the library.
Geometry and printer problems met during validation are reported as
:mod:`page_setup.types` outcomes; the exceptions below are raised for
invalid values and for failures of the surrounding collaborators.
"""


class PageSetupError(Exception):
    """Base exception for all Page Setup errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown page setup error occurred."


class InvalidGeometryError(PageSetupError, ValueError):
    """Raised when a page size or margin value is negative or unusable."""

    @property
    def default_message(self) -> str:
        return "Page dimensions and margins must not be negative."


class UnknownUnitError(PageSetupError, ValueError):
    """Raised when a measurement unit cannot be resolved."""

    @property
    def default_message(self) -> str:
        return "Unknown measurement unit."


class UnknownOrientationError(PageSetupError, ValueError):
    """Raised when a page orientation cannot be resolved."""

    @property
    def default_message(self) -> str:
        return "Unknown page orientation."


class PrinterCapabilityError(PageSetupError):
    """Raised when a capability provider cannot answer for a printer."""

    @property
    def default_message(self) -> str:
        return "The printer capability provider failed."


class ProfileError(PrinterCapabilityError):
    """Raised when a printer profile file is malformed or unsupported."""

    @property
    def default_message(self) -> str:
        return "Invalid printer profile file."


class InvalidPDFError(PageSetupError):
    """Raised when a PDF file is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."
