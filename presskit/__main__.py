"""Entry point for python -m presskit."""

import uvicorn

from .api import app
from .config import settings


def main() -> None:
    """Run the Presskit server."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
