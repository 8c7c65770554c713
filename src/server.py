"""Protean Engine runner for the marketplace domain.

Starts the Engine workers that process events asynchronously in production:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams and invokes the order processor

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

import structlog
from protean.server.engine import Engine

from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


async def run():
    marketplace.init()
    logger.info("Starting engine", domain=marketplace.name)
    await Engine(marketplace).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
