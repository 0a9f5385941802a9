"""Lot ledger: replays buys and sells into the set of still-open tax lots."""
from typing import Iterable, List, Tuple

from loguru import logger

from .config import ALGORITHMS
from .errors import InvalidSideError, ParseError, TaxLotError, UnknownAlgorithmError
from .parser import Lot, Transaction, parse_transaction, weighted_price
from .selection import Fill, execute_sale


class TaxLots:
    """Open lots for one replay, kept in ascending id (acquisition) order.

    The ledger is an immutable snapshot; each step builds the next one and
    only swaps it in once the step has succeeded.
    """

    def __init__(self, algorithm: str):
        if algorithm not in ALGORITHMS:
            raise UnknownAlgorithmError(algorithm)
        self.algorithm = algorithm
        self._lots: Tuple[Lot, ...] = ()
        self.created = 0     # lots opened so far, never decremented
        self.processed = 0

    @property
    def lots(self) -> List[Lot]:
        return list(self._lots)

    def buy(self, tx: Transaction):
        last = self._lots[-1] if self._lots else None
        if last is None or last.date != tx.date:
            lot = tx.to_lot()
            self._lots = self._lots + (lot,)
            self.created = lot.id
            logger.debug("Opened lot {} on {}: {} @ {}", lot.id, lot.date, lot.quantity, lot.price)
            return

        # same day as the most recent lot: fold into it at the weighted price
        new = tx.to_lot()
        merged = Lot(last.id, last.date, weighted_price(last, new),
                     last.quantity + new.quantity, last.tx_type)
        self._lots = self._lots[:-1] + (merged,)
        logger.debug("Merged buy into lot {}: {} @ {}", merged.id, merged.quantity, merged.price)

    def sell(self, tx: Transaction) -> List[Fill]:
        try:
            self._lots, fills = execute_sale(self._lots, tx.quantity, self.algorithm)
        except TaxLotError as exc:
            raise exc.with_context(algorithm=self.algorithm)
        return fills

    def apply(self, raw: str):
        try:
            tx = parse_transaction(raw, self.created)
        except ParseError as exc:
            raise exc.with_context(record=raw, lot_count=self.created)

        if tx.side == "buy":
            self.buy(tx)
        elif tx.side == "sell":
            self.sell(tx)
        else:
            raise InvalidSideError(tx.side).with_context(record=raw, lot_count=self.created)
        self.processed += 1


def process_transactions(records: Iterable[str], algorithm: str) -> List[Lot]:
    """Replay ``records`` (chronological) and return the remaining lots.

    All or nothing: any bad record or impossible sale raises and no lots
    are returned.
    """
    ledger = TaxLots(algorithm)
    for raw in records:
        try:
            ledger.apply(raw)
        except TaxLotError as exc:
            logger.warning("Replay aborted after {} record(s): {}", ledger.processed, exc)
            raise
    logger.info("Replayed {} record(s) with {}: {} open lot(s)",
                ledger.processed, algorithm, len(ledger.lots))
    return ledger.lots
