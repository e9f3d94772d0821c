'''
Module de configuration pour le logger centralisé de fuzzscore.

Ce module utilise Loguru pour fournir un logger pré-configuré avec une sortie
console (avec couleurs) et, si LOG_TO_FILE est actif, des fichiers rotatifs.
'''

import os
import sys
from loguru import logger

from fuzzscore.config import settings

# ==============================================================================
# Configuration de Loguru
# ==============================================================================

# 1. Supprimer le handler par défaut pour éviter les doublons
logger.remove()

# 2. Définir les formats pour les logs
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

# 3. Ajouter un handler pour la sortie console (stderr)
logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format=LOG_FORMAT_CONSOLE,
    colorize=True,
    backtrace=True,
    diagnose=False
)


def _add_file_handler(filename: str, level: str, levels: tuple = ()) -> None:
    """Ajoute un fichier rotatif (rotation journalière, 30 jours, zip)."""
    logger.add(
        os.path.join(settings.LOG_DIR, filename),
        level=level,
        format=LOG_FORMAT_FILE,
        rotation="00:00",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
        filter=(lambda record: record["level"].name in levels) if levels else None,
    )


# 4. Fichiers de log par niveau, uniquement si demandé (le scoring est une
#    bibliothèque : pas d'écriture disque par défaut)
if settings.LOG_TO_FILE:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    _add_file_handler("debug.log", "DEBUG", ("DEBUG",))
    _add_file_handler("info.log", "INFO", ("INFO", "WARNING"))
    _add_file_handler("error.log", "ERROR")

# Exemple d'utilisation :
# from fuzzscore.logger import logger
# logger.debug("Régime TokenMax : partial")
