"""Logging setup driven by Settings.

Each setting in ``LOGGER_LEVELS`` controls a group of loggers, so SQL
echo or uvicorn access lines can be quietened while snippet events stay
visible. Called once from the FastAPI lifespan.
"""

import logging
import logging.config

from snipshare.config import Settings, get_settings

LOGGER_LEVELS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_snippets": (
        "snipshare.application",
        "snipshare.infrastructure.security",
        "snipshare.presentation",
    ),
}


def build_logging_config(settings: Settings) -> dict:
    """Translate Settings into a ``logging.config.dictConfig`` mapping."""
    loggers = {
        name: {"level": _level_name(getattr(settings, field))}
        for field, names in LOGGER_LEVELS.items()
        for name in names
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": loggers,
        "root": {"level": _level_name(settings.log_level), "handlers": ["stderr"]},
    }


def setup_logging() -> None:
    settings = get_settings()
    config = build_logging_config(settings)
    root = logging.getLogger()
    # dictConfig replaces root handlers; keep any that a runner installed.
    if root.handlers:
        root_level = config.pop("root")["level"]
        config["handlers"] = {}
        logging.config.dictConfig(config)
        root.setLevel(root_level)
    else:
        logging.config.dictConfig(config)
    logging.getLogger(__name__).debug("Logging configured at root level %s", settings.log_level)


def _level_name(raw: str) -> str:
    """Normalise a level name, falling back to INFO for unknown values."""
    name = (raw or "").upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"
