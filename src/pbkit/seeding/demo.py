"""Reset a PocketBase server to the demo data set.

Steps: log in as superuser, check that the server's collections and fields
match the demo file, truncate the demo collections, insert the demo records.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from pbkit.client.pocketbase import PocketBase
from pbkit.config import Settings, get_settings
from pbkit.shared.exceptions import PbkitError, SeedError

logger = logging.getLogger(__name__)

SUPERUSERS_COLLECTION = "_superusers"
USERS_COLLECTION = "users"


class ExistingCollection(BaseModel):
    model_config = {"frozen": True}

    fields: list[str]


class DemoData(BaseModel):
    """Contents of ``demo-data.json``."""

    model_config = {"frozen": True, "populate_by_name": True}

    existing_collections: dict[str, ExistingCollection] = Field(alias="existingCollections")
    data: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)


def load_demo_data(path: str | Path) -> DemoData:
    """Read and validate a demo data file.

    Raises:
        SeedError: If the file is missing or malformed.
    """
    path = Path(path)
    try:
        return DemoData.model_validate_json(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SeedError(f"demo data file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SeedError(f"cannot read demo data file {path}: {exc}") from exc
    except ValidationError as exc:
        raise SeedError(f"invalid demo data file {path}: {exc}") from exc


def check_schema(collections: list[dict[str, Any]], demo: DemoData) -> None:
    """Compare the server's non-system collections and visible fields with the demo file.

    Raises:
        SeedError: Listing every difference found.
    """
    server = {c.get("name", ""): c for c in collections if not c.get("name", "").startswith("_")}
    expected = demo.existing_collections
    problems: list[str] = []

    missing = sorted(set(expected) - set(server))
    unexpected = sorted(set(server) - set(expected))
    if missing:
        problems.append(f"collections missing on server: {', '.join(missing)}")
    if unexpected:
        problems.append(f"collections not in demo data: {', '.join(unexpected)}")

    for name in sorted(set(server) & set(expected)):
        fields = {f.get("name") for f in server[name].get("fields", []) if not f.get("hidden")}
        wanted = set(expected[name].fields)
        if fields != wanted:
            problems.append(
                f"{name}: fields missing on server {sorted(wanted - fields)}, "
                f"not in demo data {sorted(fields - wanted)}"
            )

    if problems:
        raise SeedError("schema mismatch: " + "; ".join(problems))


async def seed(
    pb: PocketBase,
    demo: DemoData,
    *,
    email: str,
    password: str,
    user_password: str,
) -> int:
    """Replace the demo collections' contents with the demo records.

    Returns:
        Number of records created.
    """
    await pb.collection(SUPERUSERS_COLLECTION).auth_with_password(email, password)

    collections = await pb.collections.get_full_list()
    check_schema(collections, demo)

    names = [c["name"] for c in collections if not c["name"].startswith("_")]
    try:
        async with asyncio.TaskGroup() as tg:
            for name in names:
                tg.create_task(pb.collections.truncate(name))
    except ExceptionGroup as eg:
        # Surface the first failure; the group cancels and awaits the rest.
        raise eg.exceptions[0] from eg
    logger.info("truncated %d collection(s)", len(names))

    created = 0
    for name, records in demo.data.items():
        service = pb.collection(name)
        for record in records:
            body = dict(record)
            if name == USERS_COLLECTION:
                body["password"] = user_password
                body["passwordConfirm"] = user_password
            await service.create(body)
            created += 1
        logger.info("seeded %d record(s) into %s", len(records), name)

    return created


async def run(settings: Settings) -> int:
    demo = load_demo_data(settings.demo_data)
    async with PocketBase(settings.url, timeout=settings.timeout) as pb:
        try:
            return await seed(
                pb,
                demo,
                email=settings.email,
                password=settings.password,
                user_password=settings.demo_user_password,
            )
        finally:
            pb.auth_store.clear()


def main() -> None:
    """Entry point for ``python -m pbkit.seeding.demo``."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    settings = get_settings()
    logger.info("seeding %s from %s", settings.url, settings.demo_data)
    try:
        created = asyncio.run(run(settings))
    except PbkitError as exc:
        logger.error("demo seeding failed: %s", exc)
        raise SystemExit(1) from exc
    logger.info("done, %d record(s) created", created)


if __name__ == "__main__":
    main()
