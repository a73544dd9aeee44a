"""Centralised configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Toolkit configuration loaded from ``POCKETBASE_*`` environment variables."""

    model_config = {"env_prefix": "POCKETBASE_", "frozen": True}

    # Superuser credentials (entrypoint upsert + seeder login)
    email: str = ""
    password: str = ""

    # Server binary
    binary: str = "/usr/local/bin/pocketbase"
    data_dir: str = "/pb_data"
    http_addr: str = "0.0.0.0:8090"

    # REST client
    url: str = "http://localhost:8090"
    timeout: int = 30

    # Demo seeding
    demo_data: str = "./data/demo-data.json"
    # Every seeded "users" record gets this password.
    demo_user_password: str = "qwertyui"

    @property
    def has_credentials(self) -> bool:
        return bool(self.email) and bool(self.password)


def get_settings() -> Settings:
    """Factory; allows overriding in tests."""
    return Settings()
