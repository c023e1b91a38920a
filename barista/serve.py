"""Launch the coffee assistant under Uvicorn."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn

logger = logging.getLogger("barista.launcher")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the coffee assistant API")
    parser.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"), help="Interface to bind.")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", "8000")),
        help="Port to listen on.",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logger.debug("Starting on %s:%s", args.host, args.port)
    uvicorn.run("barista.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
