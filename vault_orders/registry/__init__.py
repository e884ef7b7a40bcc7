"""
Protocol address registry.
"""
from .address_book import AddressBook, normalize_role, normalize_symbol

__all__ = ["AddressBook", "normalize_role", "normalize_symbol"]
