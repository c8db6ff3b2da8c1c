"""Catering operations backend: stock ledger, purchases, orders and menu."""

__version__ = "1.0.0"
