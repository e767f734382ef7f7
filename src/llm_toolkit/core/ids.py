"""
Génération d'identifiants uniques.
"""
import logging
import random
import string
import time
import uuid

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def now_ms() -> int:
    """Timestamp courant en millisecondes."""
    return int(time.time() * 1000)


def _random_suffix(length: int = 7) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))


def generate_id(prefix: str) -> str:
    """
    Génère un identifiant `<prefix>-<uuid4>`.

    Si la source aléatoire de l'OS est indisponible, retombe sur
    `<prefix>-<timestamp ms>-<suffixe base36>`. Ce fallback est unique avec
    une forte probabilité mais n'est PAS cryptographiquement sûr.

    Args:
        prefix: Préfixe de l'identifiant (ex: "conv", "msg-user")

    Returns:
        Identifiant unique
    """
    try:
        return f"{prefix}-{uuid.uuid4()}"
    except NotImplementedError:
        logger.warning("⚠️ [IDS] uuid4 indisponible (pas de source aléatoire OS)")

    logger.warning("⚠️ [IDS] Génération d'ID non sécurisée (fallback timestamp + aléatoire)")
    return f"{prefix}-{now_ms()}-{_random_suffix()}"
