"""
Core business logic services.

Layer-pure services that depend only on:
- catering/core/entities/*
- catering/core/interfaces/*
- catering/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from catering.core.services.numbering import (
    ORDER_PREFIX,
    PURCHASE_PREFIX,
    generate_reference,
)
from catering.core.services.stock_ledger import StockLedgerService

__all__ = [
    "StockLedgerService",
    "generate_reference",
    "PURCHASE_PREFIX",
    "ORDER_PREFIX",
]
