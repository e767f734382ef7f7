"""
Lecture incrémentale d'une réponse streaming.

Chaque fragment reçu est décodé par l'adaptateur du provider puis, s'il
n'est pas vide, transmis au callback avant la lecture du fragment suivant.
"""
import logging
from datetime import datetime
from typing import Callable

import httpx

from ..core.exceptions import StreamingUnavailableError
from ..providers.base import ProviderAdapter

logger = logging.getLogger(__name__)


# Types d'erreurs streaming connus
STREAMING_ERROR_TYPES = {
    "read_error": "Connexion interrompue par le provider",
    "connect_error": "Impossible de se connecter au provider",
    "timeout_error": "Timeout lors de la lecture du stream",
    "unknown": "Erreur streaming inconnue"
}


async def consume_stream(
    response: httpx.Response,
    adapter: ProviderAdapter,
    on_chunk: Callable[[str], None]
) -> str:
    """
    Consomme le corps d'une réponse streaming.

    Args:
        response: Réponse HTTPX ouverte en streaming
        adapter: Adaptateur qui décode chaque fragment
        on_chunk: Callback appelé (synchrone) pour chaque texte non vide

    Returns:
        Concaténation des textes décodés

    Raises:
        StreamingUnavailableError: Corps déjà consommé ou fermé
        httpx.HTTPError: Erreur réseau pendant la lecture (loggée puis relancée)
    """
    full_text = ""
    chunk_count = 0
    stream_start_time = datetime.now()

    try:
        async for chunk in response.aiter_text():
            chunk_count += 1
            text = adapter.decode_stream_chunk(chunk)
            if text:
                full_text += text
                on_chunk(text)
    except (httpx.StreamConsumed, httpx.StreamClosed) as e:
        raise StreamingUnavailableError(adapter.name) from e
    except httpx.ReadError as e:
        _log_streaming_error("read_error", adapter.name, chunk_count, str(e), stream_start_time)
        raise
    except httpx.ConnectError as e:
        _log_streaming_error("connect_error", adapter.name, chunk_count, str(e), stream_start_time)
        raise
    except httpx.TimeoutException as e:
        _log_streaming_error("timeout_error", adapter.name, chunk_count, str(e), stream_start_time)
        raise

    logger.debug(
        f"[STREAM] {adapter.name}: {chunk_count} fragment(s), {len(full_text)} caractère(s)"
    )
    return full_text


def _log_streaming_error(
    error_type: str,
    provider: str,
    chunks_received: int,
    error: str,
    start_time: datetime
) -> None:
    """Log structuré d'une erreur streaming."""
    duration = (datetime.now() - start_time).total_seconds()
    error_msg = STREAMING_ERROR_TYPES.get(error_type, STREAMING_ERROR_TYPES["unknown"])

    logger.error(
        f"🔴 [STREAM_ERROR] {error_msg}\n"
        f"   Provider: {provider}\n"
        f"   Chunks reçus: {chunks_received}\n"
        f"   Durée: {duration:.2f}s\n"
        f"   Détail: {error[:200]}"
    )
