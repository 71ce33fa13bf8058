"""Entry point for standalone backend process."""

import uvicorn

from zipmod_dedup.config import settings
from zipmod_dedup.main import app


def main() -> None:
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
