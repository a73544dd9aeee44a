"""Container entrypoint: upsert the superuser, then become ``pocketbase serve``.

Reads ``POCKETBASE_EMAIL`` and ``POCKETBASE_PASSWORD``; both are required.
The upsert runs as a child process, after which this process is replaced by
the server so that container signals reach PocketBase directly.
"""

from __future__ import annotations

import logging
import os
import subprocess

from pbkit.config import Settings, get_settings
from pbkit.shared.exceptions import BootstrapError

logger = logging.getLogger(__name__)


def upsert_command(settings: Settings) -> list[str]:
    return [
        settings.binary,
        "--dir",
        settings.data_dir,
        "superuser",
        "upsert",
        settings.email,
        settings.password,
    ]


def serve_command(settings: Settings) -> list[str]:
    return [
        settings.binary,
        "serve",
        "--dir",
        settings.data_dir,
        "--http",
        settings.http_addr,
    ]


def upsert_superuser(settings: Settings) -> int:
    """Create or update the superuser; returns the CLI exit status."""
    logger.info("creating superuser %s in %s", settings.email, settings.data_dir)
    try:
        subprocess.check_call(upsert_command(settings))
    except subprocess.CalledProcessError as exc:
        logger.error("superuser upsert exited with status %d", exc.returncode)
        return exc.returncode
    except OSError as exc:
        raise BootstrapError(f"cannot run {settings.binary}: {exc}") from exc
    return 0


def serve(settings: Settings) -> None:
    """Replace the current process with the PocketBase server. Does not return."""
    cmd = serve_command(settings)
    logger.info("starting %s", " ".join(cmd))
    try:
        os.execvp(cmd[0], cmd)
    except OSError as exc:
        raise BootstrapError(f"cannot exec {settings.binary}: {exc}") from exc


def run(settings: Settings) -> int:
    if not settings.has_credentials:
        logger.error("POCKETBASE_EMAIL and POCKETBASE_PASSWORD must both be set")
        return 1

    status = upsert_superuser(settings)
    if status != 0:
        return status

    serve(settings)
    return 0


def main() -> None:
    """Entry point for ``python -m pbkit.bootstrap.entrypoint``."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        raise SystemExit(run(get_settings()))
    except BootstrapError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
