"""Reference number generation for purchases and orders."""

import secrets
from datetime import date

PURCHASE_PREFIX = "PO"
ORDER_PREFIX = "ORD"


def generate_reference(prefix: str, issued_on: date | None = None) -> str:
    """
    Build a reference like ``PO-20240115-3FA9C2``.

    The date part is always the day the reference is issued, never the
    business date of the document: a back-dated purchase still gets a
    number stamped with today. ``issued_on`` only exists so callers can pin
    the clock. The 24-bit random suffix makes same-day collisions unlikely;
    uniqueness itself is enforced by the store's unique index.
    """
    day = (issued_on or date.today()).strftime("%Y%m%d")
    return f"{prefix}-{day}-{secrets.token_hex(3).upper()}"
