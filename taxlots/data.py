"""Read transaction records from a line stream or a file."""
from pathlib import Path
from typing import Iterator, List, TextIO, Union

from loguru import logger


def read_transaction_log(stream: TextIO) -> Iterator[str]:
    """Yield records up to the first blank line (or end of input)."""
    for line in stream:
        record = line.rstrip("\r\n")
        if not record:
            break
        yield record


def load_transaction_log(path: Union[str, Path]) -> List[str]:
    file = Path(path)
    if not file.exists():
        raise FileNotFoundError(file)
    logger.debug(f"Reading {file}")
    with open(file) as f:
        return list(read_transaction_log(f))
