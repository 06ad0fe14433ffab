"""Protean Engine runner for the storefront domain.

In production (``event_processing = "async"``) event handlers such as the
checkout webhook notifier run here instead of inside the request.

Usage:
    python src/server.py
    python src/server.py --test-mode   # Process pending messages and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine


def _get_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


async def run(test_mode=False):
    engine = Engine(_get_domain(), test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
