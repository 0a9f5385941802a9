#!/usr/bin/env python
"""CLI: replay a buy/sell log and print the remaining tax lots."""
import argparse
import sys

from loguru import logger

from taxlots.config import ALGORITHMS, LOG_DIR, LOG_LEVEL, LOG_TO_FILE
from taxlots.data import load_transaction_log, read_transaction_log
from taxlots.errors import TaxLotError
from taxlots.reporting import write_lots, write_report
from taxlots.taxes import process_transactions

EXAMPLE = ("Example usage:\n"
           "echo -e '2021-01-01,buy,10000.00,1.00000000\\n"
           "2021-02-01,sell,20000.00,0.50000000' | taxlots fifo")


def setup_logging(verbose: bool):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else LOG_LEVEL)
    if LOG_TO_FILE:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(LOG_DIR / "taxlots_{time}.log", level="DEBUG", rotation="10 MB")


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__, epilog=EXAMPLE,
                                 formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("algorithm", type=str.lower, choices=ALGORITHMS,
                    help="lot selection: fifo (earliest first) or hifo (highest cost first)")
    ap.add_argument("--input", dest="input_path",
                    help="read records from this file instead of stdin")
    ap.add_argument("--report", dest="report_path",
                    help="also write a markdown summary of the open lots here")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(sys.argv[1:] if argv is None else argv)

    setup_logging(args.verbose)

    try:
        if args.input_path:
            records = load_transaction_log(args.input_path)
        else:
            records = read_transaction_log(sys.stdin)
        lots = process_transactions(records, args.algorithm)
    except (TaxLotError, OSError) as exc:
        sys.stderr.write(f"ERROR: {exc}\n\n{EXAMPLE}\n")
        return 1

    write_lots(lots, sys.stdout)
    if args.report_path:
        write_report(lots, args.algorithm, args.report_path)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
