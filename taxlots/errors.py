"""Exceptions raised while replaying a transaction log.

Every failure aborts the whole replay.  The engine attaches the context
needed to reproduce it (offending record, lots created so far, active
algorithm) via ``with_context`` before letting the error propagate.
"""
from typing import Optional


class TaxLotError(Exception):
    """Base class for all replay failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.record: Optional[str] = None
        self.lot_count: Optional[int] = None
        self.algorithm: Optional[str] = None

    def with_context(self, record: Optional[str] = None,
                     lot_count: Optional[int] = None,
                     algorithm: Optional[str] = None) -> "TaxLotError":
        if record is not None:
            self.record = record
        if lot_count is not None:
            self.lot_count = lot_count
        if algorithm is not None:
            self.algorithm = algorithm
        return self

    def __str__(self):
        return self.message


class ParseError(TaxLotError):
    """A raw record could not be turned into a transaction."""

    def __str__(self):
        if self.record is None:
            return self.message
        return f"Problem parsing raw transaction ({self.record}): {self.message}"


class FieldCountError(ParseError):
    def __init__(self, got: int, raw: str):
        super().__init__(
            f"Invalid tx format; incorrect argument count (should be 4, got {got}): {raw}")
        self.got = got


class InvalidSideError(ParseError):
    def __init__(self, side: str):
        super().__init__(f'Invalid order type (must be either "buy" or "sell"): {side}')
        self.side = side


class NumericFormatError(ParseError):
    def __init__(self, field: str, value: str):
        super().__init__(f"Invalid (non-float) {field}: {value}")
        self.field = field
        self.value = value


class UnknownAlgorithmError(TaxLotError):
    def __init__(self, algorithm: str):
        super().__init__(f'Invalid algorithm (must be either "fifo" or "hifo"): {algorithm}')
        self.algorithm = algorithm


class InsufficientLotsError(TaxLotError):
    """A sale asked for more than the open lots hold."""

    def __init__(self, shortfall: float):
        super().__init__("Sale quantity exceeded total buy quantity; "
                         "please ensure that transaction log input is valid")
        self.shortfall = shortfall

    def __str__(self):
        if self.algorithm is None:
            return self.message
        return f"Problem executing sale ({self.algorithm}): {self.message}"
