"""Run the service: ``python -m prizestore``."""

from __future__ import annotations

import uvicorn

from prizestore.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "prizestore.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
