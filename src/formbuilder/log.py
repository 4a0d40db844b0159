import copy
import logging
import logging.config

from .consts import LOG_FILE_DEFAULT
from .utils import canonicalify, ensure_path

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": logging.DEBUG,
            "formatter": "default",
            "filename": LOG_FILE_DEFAULT,
            "maxBytes": 5 * 1024 * 1024,  # 5MB
            "backupCount": 10,
        },
    },
    "loggers": {
        "formbuilder": {
            "handlers": ["console", "file"],
            "level": logging.DEBUG,
            "propagate": True,
        }
    },
}


def setup(logfile=None):
    config = copy.deepcopy(LOGGING_CONFIG)
    if logfile:
        config["handlers"]["file"]["filename"] = str(logfile)

    p = canonicalify(config["handlers"]["file"]["filename"])
    if len(p.parts) > 1:
        ensure_path(p.parent)
    config["handlers"]["file"]["filename"] = str(p)

    logging.config.dictConfig(config)


logger = logging.getLogger("formbuilder")
