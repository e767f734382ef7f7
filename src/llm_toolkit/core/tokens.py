"""
Estimation du nombre de tokens.

L'estimation se base uniquement sur la longueur en caractères
(AVERAGE_CHARS_PER_TOKEN caractères par token). Ce n'est pas un tokenizer:
l'écart avec le comptage réel d'un provider peut être important, en
particulier pour les langues non latines et le code.
"""
import math
from typing import Iterable

from .constants import AVERAGE_CHARS_PER_TOKEN


def estimate_token_count(text: str) -> int:
    """
    Estime le nombre de tokens d'un texte.

    Args:
        text: Texte à analyser

    Returns:
        ceil(len(text) / AVERAGE_CHARS_PER_TOKEN), 0 pour un texte vide
    """
    if not text:
        return 0
    return math.ceil(len(text) / AVERAGE_CHARS_PER_TOKEN)


def estimate_history_tokens(contents: Iterable[str]) -> int:
    """
    Estime les tokens d'un historique complet.

    Les contenus sont joints par un espace avant estimation.
    """
    return estimate_token_count(" ".join(contents))
