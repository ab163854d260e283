from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

import requests

console = Console()

FORMAT = "%(message)s"


def setup_logging(level: str = "") -> None:
    logging_handler = RichHandler(
        level=(level or os.environ.get("LOGLEVEL", "INFO")).upper(),
        console=console,
        rich_tracebacks=True,
        tracebacks_suppress=[requests],
    )

    logging.basicConfig(
        level="NOTSET", format=FORMAT, datefmt="[%X]", handlers=[logging_handler]
    )

    install(
        console=console
    )
    # requests/urllib3 are chatty at DEBUG on every poll
    logging.getLogger("urllib3").setLevel(logging.WARNING)
