"""Runtime settings read from the environment."""

import logging
import os
from dataclasses import dataclass, field

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """Server settings. ``PORT`` keeps the name hosting platforms set."""

    host: str = field(default_factory=lambda: os.getenv("CAMPUS_NETWORK_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_level: str = field(default_factory=lambda: os.getenv("CAMPUS_NETWORK_LOG_LEVEL", "INFO").upper())


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
