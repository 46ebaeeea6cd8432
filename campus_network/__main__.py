"""Run the optimize API with uvicorn."""

import uvicorn

from .config import Settings, configure_logging


def main() -> int:
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run("campus_network.server:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
