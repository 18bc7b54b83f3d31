#!/usr/bin/env python3
"""Write configuration defaults into the database for keys that are unset."""

import asyncio
import sys

import logfire

from narravo.config import Settings
from narravo.domain.service import ConfigService
from narravo.util.di.container import create_container
from narravo.util.logging import setup_logging
from narravo.util.observability import configure_logfire


async def seed() -> list[str]:
    container = create_container()
    try:
        # Request scope commits the session on exit
        async with container() as request_container:
            config_service = await request_container.get(ConfigService)
            return await config_service.seed_defaults()
    finally:
        await container.close()


def main() -> int:
    """Seed configuration and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        seeded = asyncio.run(seed())
        logfire.info("Configuration seeding completed", count=len(seeded))
        return 0

    except Exception as e:
        logfire.error(
            "Configuration seeding failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
