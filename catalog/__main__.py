"""
Run the catalog API with uvicorn.

Usage:
    python -m catalog

Host, port and storage backend come from the environment (see core.config).
"""
import uvicorn

from catalog.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "catalog.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
