"""
tagalog_app.db.__main__

Entrypoint for `python -m tagalog_app.db`.

Responsibilities:
- Create or drop the schema against the configured database (dev/test).
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

from tagalog_app.db.init_db import drop_db, init_db
from tagalog_app.db.session import create_engine
from tagalog_app.observability.logging import configure_logging, get_logger
from tagalog_app.settings import Settings, get_settings

log = get_logger(__name__)


async def _run(command: str, settings: Settings) -> None:
    engine = create_engine(settings)
    try:
        if command == "create":
            await init_db(engine)
        else:
            await drop_db(engine)
    finally:
        await engine.dispose()
    event = "schema_created" if command == "create" else "schema_dropped"
    log.info(event, env=settings.env)


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m tagalog_app.db")
    parser.add_argument("command", choices=("create", "drop"))
    args = parser.parse_args(argv)

    settings = settings or get_settings()
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, env=settings.env
    )

    if args.command == "drop" and settings.env == "prod":
        log.error("drop_refused", env=settings.env)
        return 1

    asyncio.run(_run(args.command, settings))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())


# --- Module Notes -----------------------------------------------------------
# Production databases are provisioned with `alembic upgrade head`.
