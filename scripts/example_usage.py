#!/usr/bin/env python3
"""Walk through the client against a running server seeded with the demo data."""

import asyncio
import logging

from pbkit.client.pocketbase import PocketBase
from pbkit.config import get_settings
from pbkit.shared.exceptions import ApiError
from pbkit.shared.options import ListOptions

logging.basicConfig(level=logging.ERROR)  # Quiet logs
logger = logging.getLogger("example")
logger.setLevel(logging.INFO)


async def authenticate(pb: PocketBase, email: str, password: str) -> None:
    try:
        response = await pb.collection("_superusers").auth_with_password(email, password)
    except ApiError as exc:
        raise SystemExit(f"login failed: {exc}") from exc

    logger.info("Authenticated as %s", response.record.email)
    logger.info("is valid: %s", pb.auth_store.is_valid)
    logger.info("is superuser: %s", pb.auth_store.is_superuser)


async def main() -> None:
    settings = get_settings()
    async with PocketBase(settings.url) as pb:
        await authenticate(pb, settings.email, settings.password)

        articles = await pb.collection("articles").get_full_list()
        print(f"\nAll articles ({len(articles)}):")
        for article in articles:
            print(f"  {article['id']}  {article['name']}  {article['price']}")

        first_page = await pb.collection("articles").get_list(ListOptions.paginated(1, 1))
        print(f"\nFirst page: {first_page.items} (total={first_page.total_items})")


if __name__ == "__main__":
    asyncio.run(main())
