# office_hours/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the `office_hours` logger.

    Safe to call more than once (e.g. once per app instance in tests);
    repeated calls only update the level.
    """
    package_logger = logging.getLogger("office_hours")
    package_logger.setLevel(level.upper())

    if not any(getattr(h, "_office_hours", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._office_hours = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
