import logging
import sys
import time
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "oneaccount"


class UTCJsonFormatter(JsonFormatter):
    converter = time.gmtime


def setup_logging(
    level: str = "INFO",
    *,
    app_env: str = "dev",
    oneaccount_level: Optional[str] = None,
) -> None:
    """
    JSON logs on stdout. Every record carries the service name and the
    environment; ``oneaccount_level`` tunes the staged-auth loggers (store
    sweeps, rejected pickups) apart from everything else.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler.setFormatter(
        UTCJsonFormatter(
            fmt,
            rename_fields={"levelname": "level"},
            static_fields={"service": SERVICE_NAME, "env": app_env},
        )
    )
    root.addHandler(handler)

    logging.getLogger(SERVICE_NAME).setLevel((oneaccount_level or level).upper())
    logging.getLogger("httpx").setLevel("WARNING")
