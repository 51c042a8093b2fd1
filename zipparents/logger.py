'''
Logger centralisé du service ZipParents.

Loguru est configuré une seule fois ici : une sortie console colorée et des
fichiers journaliers séparés par niveau sous ``settings.LOG_DIR``.
'''

import os
import sys

from loguru import logger

from zipparents.config import settings

if not os.path.exists(settings.LOG_DIR):
    os.makedirs(settings.LOG_DIR)

# Pas de handler par défaut, sinon chaque message sort deux fois
logger.remove()

LOG_FORMAT_CONSOLE = (
    "<white>{time:YYYY-MM-DD HH:mm:ss.SSS}</white> | "
    "<level>{level: <8}</level> | "
    "<light-black>{name}:{function}:{line}</light-black> - "
    "<level><b>{message}</b></level>"
)
LOG_FORMAT_FILE = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} - "
    "{message}"
)

logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format=LOG_FORMAT_CONSOLE,
    colorize=True,
    backtrace=True,
    diagnose=True,
)


def _file_sink(filename: str) -> str:
    return os.path.join(settings.LOG_DIR, filename)


# Rotation à minuit, 30 jours de rétention, archives zip
logger.add(
    _file_sink("debug.log"),
    level="DEBUG",
    format=LOG_FORMAT_FILE,
    rotation="00:00",
    retention="30 days",
    compression="zip",
    encoding="utf-8",
    filter=lambda record: record["level"].name == "DEBUG",
)

logger.add(
    _file_sink("info.log"),
    level="INFO",
    format=LOG_FORMAT_FILE,
    rotation="00:00",
    retention="30 days",
    compression="zip",
    encoding="utf-8",
    filter=lambda record: record["level"].name in ("INFO", "WARNING"),
)

logger.add(
    _file_sink("error.log"),
    level="ERROR",
    format=LOG_FORMAT_FILE,
    rotation="00:00",
    retention="30 days",
    compression="zip",
    encoding="utf-8",
    backtrace=True,  # 👈 trace d'appel complète sur les erreurs
    diagnose=True,
)
