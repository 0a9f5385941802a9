"""Lot selection for sales.

A selection algorithm only decides the *order* in which open lots are
consumed.  ``consume`` walks that order and applies the result to the
id-ordered ledger, so the ledger itself is never re-sorted.
"""
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Sequence, Tuple

from loguru import logger

from .errors import InsufficientLotsError, UnknownAlgorithmError
from .parser import Lot


@dataclass(frozen=True)
class Fill:
    lot_id: int
    quantity: float


def fifo_order(ledger: Sequence[Lot]) -> List[Lot]:
    """Earliest-acquired first; the ledger is already in that order."""
    return list(ledger)


def hifo_order(ledger: Sequence[Lot]) -> List[Lot]:
    """Highest cost first.  ``sorted`` is stable, so ties go to the lower id."""
    return sorted(ledger, key=lambda lot: -lot.price)


ORDERINGS: Dict[str, Callable[[Sequence[Lot]], List[Lot]]] = {
    "fifo": fifo_order,
    "hifo": hifo_order,
}


def consume(ledger: Sequence[Lot], order: Sequence[Lot],
            quantity: float) -> Tuple[Tuple[Lot, ...], List[Fill]]:
    """Sell ``quantity`` from the lots in ``order``.

    Returns the new id-ordered ledger and one ``Fill`` per lot touched.
    Raises ``InsufficientLotsError`` when the lots run out first; the
    input ledger is left as it was.
    """
    remaining = {lot.id: lot for lot in ledger}
    fills = []
    for lot in order:
        if quantity <= 0:
            break
        if lot.quantity > quantity:
            remaining[lot.id] = replace(lot, quantity=lot.quantity - quantity)
            fills.append(Fill(lot.id, quantity))
            quantity = 0
        else:
            # lot.quantity <= quantity: the whole lot goes
            quantity -= lot.quantity
            del remaining[lot.id]
            fills.append(Fill(lot.id, lot.quantity))

    if quantity > 0:
        raise InsufficientLotsError(quantity)
    return tuple(remaining[lot.id] for lot in ledger if lot.id in remaining), fills


def execute_sale(ledger: Sequence[Lot], quantity: float,
                 algorithm: str) -> Tuple[Tuple[Lot, ...], List[Fill]]:
    try:
        ordering = ORDERINGS[algorithm]
    except KeyError:
        raise UnknownAlgorithmError(algorithm) from None

    new_ledger, fills = consume(ledger, ordering(ledger), quantity)
    for fill in fills:
        logger.debug("{} sale took {} from lot {}", algorithm, fill.quantity, fill.lot_id)
    return new_ledger, fills
