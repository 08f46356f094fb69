#!/usr/bin/env python3
"""Ingress log faker entry point."""

import sys
import random
import signal
import logging

from ingress_faker.config import ConfigError, load_config
from ingress_faker.fields import make_faker
from ingress_faker.formatters import format_line
from ingress_faker.models import make_record
from ingress_faker.output import LineWriter
from ingress_faker.strategies import get_field_source
from ingress_faker.ticker import Ticker

# Internal logging to stderr (stdout carries only generated records)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [GENERATOR] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logging.getLogger("apscheduler").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_emitter(config, writer, rng=None, faker=None):
    """Return the per-tick task: assemble one record, then write it."""
    source = get_field_source(
        config,
        rng if rng is not None else random.Random(),
        faker if faker is not None else make_faker(),
    )

    def emit():
        record = make_record(source)
        writer.write(format_line(record))

    return emit


def run(config, writer, scheduler=None, rng=None, faker=None) -> int:
    ticker = Ticker(config.rate, build_emitter(config, writer, rng, faker), scheduler)

    def _signal_handler(sig, _frame):
        logger.info("Shutdown signal received (signal %d), stopping...", sig)
        ticker.stop()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    logger.info("Starting ingress log faker with config: %s", config)
    ticker.start()

    if ticker.failure is not None:
        logger.error("Aborting after emission failure: %s", ticker.failure)
        return 1
    logger.info("Ingress log faker stopped (%d ticks dropped).", ticker.dropped)
    return 0


def main() -> int:
    try:
        config = load_config()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logging.getLogger().setLevel(config.log_level)
    return run(config, LineWriter(sys.stdout))


if __name__ == "__main__":
    sys.exit(main())
