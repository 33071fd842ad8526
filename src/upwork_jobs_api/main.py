import argparse
import logging
import sys

import uvicorn

from upwork_jobs_api import config
from upwork_jobs_api.api import app

# Set up logging once, in the application entry point only
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="upwork-jobs-api",
        description="Serve scraped Upwork job listings over a JSON HTTP API.",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (overrides HOST env var, default 0.0.0.0).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (overrides PORT env var, default 3000).",
    )
    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> None:
    """CLI entry point for the package."""
    args = parse_args(argv)

    # CLI flag > env var > default
    if args.port is not None:
        if args.port <= 0:
            logger.error("--port must be a positive integer.")
            sys.exit(1)
        port = args.port
    else:
        port = config.PORT

    host = args.host or config.HOST

    logger.info(f"Server running on port {port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    cli()
