import logging
import sys

LOGGER_NAME = "apiforge"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Attach a stream handler to the ``apiforge`` logger.

    Calling it again only adjusts the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not any(getattr(h, "_apiforge", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._apiforge = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
