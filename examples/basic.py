#!/usr/bin/env python3
"""
Basic Velixar usage: store, search, get and delete a memory.

Reads the API key from VELIXAR_API_KEY (or a .env file).
"""

import asyncio

from velixar import VelixarAPIError, create_velixar_client
from velixar.logging import configure_logging, get_logger


logger = get_logger(__name__)


async def main():
    configure_logging("DEBUG")

    async with create_velixar_client() as client:
        stored = await client.store(
            "User prefers concise responses", tags=["preferences"]
        )
        print(f"Stored: {stored.id}")

        results = await client.search("preferences")
        print(f"Found: {len(results.memories)} memories")

        fetched = await client.get(stored.id)
        print(f"Memory: {fetched.memory.content}")

        await client.delete(stored.id)
        print("Deleted")

        try:
            await client.get(stored.id)
        except VelixarAPIError as e:
            logger.info("Memory is gone", status=e.status, error=e.message)


if __name__ == "__main__":
    asyncio.run(main())
