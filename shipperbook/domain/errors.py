"""
Domain Errors
Raised at the admission, codec and store boundaries only.
The derivation functions never raise on well-formed input.
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for ledger errors"""


class ValidationError(LedgerError):
    """An order offered for admission breaks an invariant (e.g. amount <= 0)"""


class MalformedRecordError(LedgerError):
    """A stored record is missing a required field or has an unparseable value"""

    def __init__(self, index: Optional[int], reason: str):
        self.index = index
        self.reason = reason
        where = f"record #{index}" if index is not None else "payload"
        super().__init__(f"Malformed {where}: {reason}")


class NotFound(LedgerError):
    """No order with the given id exists"""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id!r} not found")


class DuplicateId(LedgerError):
    """An order with the same id is already stored"""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id!r} already exists")
