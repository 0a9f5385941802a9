"""Turn raw ``date,side,price,quantity`` records into transactions and lots."""
from dataclasses import dataclass
import math

from .config import FIELD_COUNT, PRICE_DECIMALS, QUANTITY_DECIMALS, SIDES
from .errors import FieldCountError, InvalidSideError, NumericFormatError


@dataclass(frozen=True)
class Lot:
    """An open acquisition: what is left of one buy (or one day of buys)."""
    id: int
    date: str          # opaque token, only ever compared for equality
    price: float       # cost per unit
    quantity: float
    tx_type: str = "buy"

    def row(self) -> str:
        return (f"{self.id},{self.date},"
                f"{self.price:.{PRICE_DECIMALS}f},{self.quantity:.{QUANTITY_DECIMALS}f}")

    def __str__(self):
        return self.row()


@dataclass(frozen=True)
class Transaction:
    date: str
    side: str
    price: float
    quantity: float
    lot_id: int        # proposed id, only used if this buy opens a new lot

    def to_lot(self) -> Lot:
        return Lot(self.lot_id, self.date, self.price, self.quantity, self.side)


def weighted_price(old: Lot, new: Lot) -> float:
    """Quantity-weighted average price of two same-day buys."""
    total = old.quantity + new.quantity
    if total == 0:
        return old.price
    return old.price * (old.quantity / total) + new.price * (new.quantity / total)


def _parse_number(field: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise NumericFormatError(field, value) from None
    if not math.isfinite(number) or number < 0:
        raise NumericFormatError(field, value)
    return number


def parse_transaction(raw: str, lot_count: int) -> Transaction:
    """Parse one record; ``lot_count`` is the number of lots created so far."""
    fields = raw.split(",")
    if len(fields) != FIELD_COUNT:
        raise FieldCountError(len(fields), raw)

    date, side, price, quantity = fields
    side = side.lower()
    if side not in SIDES:
        raise InvalidSideError(side)

    return Transaction(
        date=date,
        side=side,
        price=_parse_number("price", price),
        quantity=_parse_number("quantity", quantity),
        lot_id=lot_count + 1,
    )
