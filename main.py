"""Post analysis service."""

import argparse
import asyncio
import logging
import os

import uvicorn

from post_analysis.api import create_app
from post_analysis.common import ConfigError, LoggingConfig, RootConfig, StorageError, load_config
from post_analysis.connectors import StorageConnector
from post_analysis.processor import format_report

logger = logging.getLogger(__name__)


def serve(config: RootConfig) -> None:
    """Run the HTTP service."""
    if not os.getenv("PORT"):
        logger.info(f"Defaulting to port {config.server.port}")

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


async def report(config: RootConfig, filename: str) -> int:
    """Print the analysis stored in ``filename``."""
    try:
        connector = StorageConnector.from_config(config.storage)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    async with connector as storage:
        try:
            records = await storage.read_records(filename)
        except StorageError as e:
            logger.error(f"failed to fetch analyzed posts from \"{filename}\": {e}")
            return 1

    print(format_report(records))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Entity and sentiment analysis of posts")
    parser.add_argument("--config", type=str, default=None, help="Path to the YAML config")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the HTTP service")

    report_parser = subparsers.add_parser("report", help="Print an analysis file")
    report_parser.add_argument("filename", help="Analysis file within the storage bucket")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 2

    (config.logging or LoggingConfig()).configure()

    if args.command == "serve":
        serve(config)
        return 0

    return asyncio.run(report(config, args.filename))


if __name__ == "__main__":
    raise SystemExit(main())
