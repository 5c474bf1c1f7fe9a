"""Standalone dice roller plugin entry point.

Run the plugin as its own process:
    python -m plugins.dice_roller [--config PATH] [--nats-url URL]
        [--log-level LEVEL] [--log-file PATH]
"""

import argparse
import asyncio
import logging
import sys

from nats.aio.client import Client as NATS

from common.config import (
    LOG_FORMAT,
    configure_logger,
    get_plugin_config,
    load_config,
    parse_log_level,
)

from .plugin import DiceRollerPlugin

DEFAULT_NATS_URL = 'nats://localhost:4222'


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Dice Roller Plugin with NATS')
    parser.add_argument(
        '--config',
        default=None,
        help='Path to JSON or YAML config file'
    )
    parser.add_argument(
        '--nats-url',
        default=None,
        help=f'NATS server URL (default: {DEFAULT_NATS_URL})'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write log records to this file'
    )
    return parser.parse_args(argv)


def configure_logging(level, log_file=None):
    """Log to stderr, plus log_file when one is given"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    if log_file:
        configure_logger(
            logging.getLogger(),
            log_file=log_file,
            log_format=LOG_FORMAT,
            log_level=level,
        )


async def main(argv=None):
    args = parse_args(argv)
    conf = load_config(args.config) if args.config else {}

    # Command line wins over the config file
    configure_logging(
        parse_log_level(args.log_level or conf.get('log_level')),
        args.log_file or conf.get('log_file'),
    )
    logger = logging.getLogger(__name__)

    nats_url = args.nats_url or conf.get('nats_url', DEFAULT_NATS_URL)
    logger.info(f"Connecting to NATS at {nats_url}...")
    nats = NATS()

    try:
        await nats.connect(nats_url)
        logger.info("Connected to NATS")
    except Exception as e:
        logger.error(f"Failed to connect to NATS: {e}")
        sys.exit(1)

    plugin = DiceRollerPlugin(
        nats, get_plugin_config(conf, DiceRollerPlugin.NAMESPACE)
    )

    try:
        await plugin.initialize()
        logger.info("Dice roller running - press Ctrl+C to stop")

        while True:
            await asyncio.sleep(1)

    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutdown requested")
    finally:
        await plugin.shutdown()
        await nats.close()
        logger.info("Dice roller shutdown complete")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    run()
