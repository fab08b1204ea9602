"""Root logger and SQL echo switches for ``countercache inspect``."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(
    *, level: int = logging.INFO, sql_echo: bool = False, force: bool = False
) -> None:
    """Route countercache records to stderr at ``level``.

    SQLAlchemy's engine logger is held at WARNING unless ``sql_echo`` is set,
    in which case each count query is printed as it runs. ``force`` replaces
    handlers installed by an earlier call.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    engine_level = logging.INFO if sql_echo else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)
