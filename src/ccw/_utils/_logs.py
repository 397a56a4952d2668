import logging
import sys

from .constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(should_debug: bool = False) -> None:
    """Route the ``ccw`` logger to the current stderr and set its level."""
    handler = next(
        (h for h in logger.handlers if getattr(h, "_ccw_handler", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._ccw_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    else:
        handler.stream = sys.stderr  # type: ignore[attr-defined]
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)
