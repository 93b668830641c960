"""ASGI entrypoint, ``uvicorn main:app``."""

import logging

from rich.logging import RichHandler

from app.app import create_app
from app.config import Config


CONFIG = Config()


logging.basicConfig(
    level=CONFIG.log_level,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)],
)


app = create_app(CONFIG)
