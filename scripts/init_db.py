#!/usr/bin/env python3
"""Create the user schema and identity constraints with Logfire error tracking."""

import asyncio
import sys

import logfire

from outpost.config import Settings
from outpost.domain.repository import UserRepository
from outpost.util.di import build_container
from outpost.util.logging import setup_logging
from outpost.util.observability import configure_logfire


async def initialize() -> None:
    """Resolve the durable repository and initialize its schema."""
    container = build_container()
    try:
        repository = await container.get(UserRepository)
        await repository.initialize()
    finally:
        await container.close()


def main() -> int:
    """Initialize the database and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting schema initialization")
        asyncio.run(initialize())
        logfire.info("Schema initialization completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Schema initialization failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
