"""
Récupération HTTP des pages produit (httpx).
Un client par appel, timeout fixe, aucune relance.
"""
import logging
from typing import Optional

import httpx

from shopcurator.config import SCRAPE_TIMEOUT_SECONDS
from shopcurator.errors import UpstreamFetchError

logger = logging.getLogger(__name__)

# En-têtes « navigateur » pour limiter les pages de blocage basiques
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class PageFetcher:
    def __init__(
        self,
        timeout: float = SCRAPE_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        # transport injectable (httpx.MockTransport en tests)
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """
        GET sur url et renvoie le texte de la page.
        - Suit les redirections
        - Statut non-2xx, timeout ou erreur réseau -> UpstreamFetchError
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=DEFAULT_HEADERS,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("scrape.fetch_failed url=%s error=%s", url, e)
            raise UpstreamFetchError(str(e) or e.__class__.__name__) from e
        logger.debug("scrape.fetched url=%s status=%s length=%s", url, response.status_code, len(response.text))
        return response.text


_default_fetcher = PageFetcher()

def get_fetcher() -> PageFetcher:
    """Dépendance FastAPI (remplaçable via app.dependency_overrides)."""
    return _default_fetcher
