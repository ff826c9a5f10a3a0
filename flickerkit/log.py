from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(verbose: bool=False) -> None:
    # stderr, so --jsonl output on stdout stays machine-readable
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]",
                        handlers=[handler], force=True)
