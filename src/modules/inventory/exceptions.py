"""Inventory exceptions."""

from __future__ import annotations


class InventoryEntryNotFound(Exception):
    """No ledger entry exists for the requested SKU."""
