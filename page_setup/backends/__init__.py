"""Capability provider abstractions for Page Setup."""

from .base import CapabilityProvider
from .profile_backend import PrinterProfile, ProfileCapabilityProvider

__all__ = [
    "CapabilityProvider",
    "PrinterProfile",
    "ProfileCapabilityProvider",
]
