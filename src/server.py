"""Protean Engine runner for the Storefront domain.

Processes events asynchronously in production (order confirmation emails,
cart clean-up after checkout).

Usage:
    python src/server.py
"""

import argparse
import asyncio

from protean.server.engine import Engine

from storefront.utils.logging import configure_logging


async def run(test_mode=False):
    from storefront.domain import storefront

    storefront.init()
    engine = Engine(storefront, test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument("--test-mode", action="store_true", help="Process pending messages once and exit")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
