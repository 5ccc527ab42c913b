"""Logger helpers shared by every module."""

import logging

LOGGER_NAMESPACE = "entityspec"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package namespace."""
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call more than once: the handler is only installed the first time,
    later calls just update the level.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Returns:
        The package root logger
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
    root.setLevel(level)

    if not any(getattr(h, "_entityspec_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._entityspec_handler = True
        root.addHandler(handler)
    return root
