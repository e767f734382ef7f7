"""
Client HTTPX vers les APIs LLM.

Une requête POST JSON par complétion. Aucun retry, aucun backoff: toute
erreur réseau ou HTTP remonte à l'appelant.
"""
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..core.exceptions import RequestFailedError

logger = logging.getLogger(__name__)


class ProviderClient:
    """
    Client HTTP pour les providers LLM.

    Gère:
    - Requêtes JSON complètes
    - Requêtes streaming (corps lu par fragments)
    - Un client httpx injecté (partagé) ou un client éphémère par appel
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.timeout = timeout
        self._http_client = http_client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        # Le client injecté appartient à l'appelant: on ne le ferme pas
        if self._http_client is not None:
            yield self._http_client
            return

        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
            yield client

    def build_request(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any]
    ) -> httpx.Request:
        """Construit une requête POST HTTPX avec body JSON."""
        return httpx.Request("POST", url, headers=headers, content=json.dumps(body))

    async def post_json(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        provider: str = None
    ) -> Any:
        """
        Envoie une requête et retourne le JSON de la réponse.

        Raises:
            RequestFailedError: Si le statut HTTP n'est pas 2xx
            httpx.HTTPError: Erreur réseau
            json.JSONDecodeError: Corps de réponse non JSON
        """
        request = self.build_request(url, headers, body)
        async with self._session() as client:
            response = await client.send(request)

        if not response.is_success:
            logger.debug(f"[HTTP] {provider} → {response.status_code}: {response.text[:500]}")
            raise RequestFailedError(response.status_code, response.text, provider)

        return response.json()

    @asynccontextmanager
    async def open_stream(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        provider: str = None
    ) -> AsyncIterator[httpx.Response]:
        """
        Ouvre une réponse streaming; elle est fermée à la sortie du bloc,
        y compris sur exception.

        Raises:
            RequestFailedError: Si le statut HTTP n'est pas 2xx
        """
        request = self.build_request(url, headers, body)
        async with self._session() as client:
            response = await client.send(request, stream=True)
            try:
                if not response.is_success:
                    await response.aread()
                    logger.debug(f"[HTTP] {provider} → {response.status_code}: {response.text[:500]}")
                    raise RequestFailedError(response.status_code, response.text, provider)

                yield response
            finally:
                await response.aclose()


def create_provider_client(
    timeout: Optional[float] = None,
    http_client: Optional[httpx.AsyncClient] = None
) -> ProviderClient:
    """
    Crée un client provider.

    Args:
        timeout: Timeout en secondes (None = désactivé)
        http_client: Client httpx partagé (optionnel)

    Returns:
        Instance de ProviderClient
    """
    return ProviderClient(timeout=timeout, http_client=http_client)
