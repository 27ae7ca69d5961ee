import logging
from coursehub.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the process.

    Modules keep using logging.getLogger(__name__); this only sets the
    level and format. Safe to call again, e.g. from tests.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    logging.getLogger("coursehub").setLevel((level or settings.LOG_LEVEL).upper())
