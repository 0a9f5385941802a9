"""Output rows and markdown report for the remaining lots."""
from datetime import datetime
from pathlib import Path
from typing import List, Sequence, TextIO, Union

import pandas as pd
from loguru import logger

from .config import PRICE_DECIMALS, QUANTITY_DECIMALS
from .parser import Lot


def format_lots(lots: Sequence[Lot]) -> List[str]:
    return [lot.row() for lot in lots]


def write_lots(lots: Sequence[Lot], stream: TextIO):
    for row in format_lots(lots):
        stream.write(row + "\n")


def lots_frame(lots: Sequence[Lot]) -> pd.DataFrame:
    """One row per open lot, indexed by lot id."""
    df = pd.DataFrame(
        [(lot.id, lot.date, lot.price, lot.quantity) for lot in lots],
        columns=["id", "date", "price", "quantity"],
    ).set_index("id")
    df["cost_basis"] = df["price"] * df["quantity"]
    return df


def write_report(lots: Sequence[Lot], algorithm: str, path: Union[str, Path]) -> Path:
    ts = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    md_path = Path(path)
    md_path.parent.mkdir(parents=True, exist_ok=True)

    df = lots_frame(lots)
    total_qty = df["quantity"].sum()
    total_cost = df["cost_basis"].sum()
    avg_cost = total_cost / total_qty if total_qty else 0.0

    summary = {
        "Algorithm":        algorithm.upper(),
        "Open lots":        len(df),
        "Total quantity":   f"{total_qty:.{QUANTITY_DECIMALS}f}",
        "Total cost basis": f"{total_cost:,.{PRICE_DECIMALS}f}",
        "Average cost":     f"{avg_cost:,.{PRICE_DECIMALS}f}",
    }

    with open(md_path, "w") as f:
        f.write(f"# Tax lot report {ts}\n\n")
        f.write("## Summary\n")
        for k, v in summary.items():
            f.write(f"- **{k}**: {v}\n")
        f.write("\n---\n")
        f.write("## Open lots\n\n")
        if df.empty:
            f.write("_No open lots._\n")
        else:
            f.write(df.to_markdown(floatfmt=".8f") + "\n")
    logger.success("Report saved ➜ {}", md_path)
    return md_path
