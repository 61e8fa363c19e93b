"""Test data for UI tests (address cases)."""

from .address_loader import AddressCase, AddressDataError, load_address_cases

__all__ = [
    "AddressCase",
    "AddressDataError",
    "load_address_cases",
]
