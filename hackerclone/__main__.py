"""HackerClone entrypoint.

Run with:
  python -m hackerclone
"""

import sys

import uvicorn

from hackerclone.config import get_settings
from hackerclone.core.errors import ConfigurationError


def main() -> None:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        sys.exit(f"hackerclone: {e.message}")
    uvicorn.run("hackerclone.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
