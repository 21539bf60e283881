"""
Error types raised by the DuoSplit ledger core
"""
from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger errors"""


class ValidationError(LedgerError):
    """Malformed expense intent or record; nothing was changed"""


class ImportFormatError(LedgerError):
    """Import payload is not a non-empty list of expense records"""


class NoOpCondition(LedgerError):
    """Informational: the requested operation had nothing to do"""


class NothingToSettle(NoOpCondition):
    def __init__(self, month: str):
        super().__init__(f"All expenses for {month} are already settled.")
        self.month = month
