import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shopcurator.config import API_PREFIX
from shopcurator.errors import AppError, UpstreamFetchError, ValidationError
from shopcurator.scraper import extractor
from shopcurator.scraper.fetcher import PageFetcher, get_fetcher
from shopcurator.scraper.models import ScrapeRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix=API_PREFIX, tags=["Scraper"])

# module shopcurator.scraper.views
@router.post("/scrape")
async def scrape_product(body: Optional[ScrapeRequest] = None, fetcher: PageFetcher = Depends(get_fetcher)):
    """
    Récupère une page produit et en extrait la fiche.
    - Entrée JSON: { "url": "https://..." }
    - Réponse: { name, price, image, description, sourceUrl }
    - Erreurs: 400 si url manquante, 500 si la page est injoignable ou illisible
    """
    url = ((body.url if body else None) or "").strip()
    if not url:
        raise ValidationError("URL is required", error="URL is required")

    logger.info("scrape.start url=%s", url)
    html = await fetcher.fetch(url)
    try:
        listing = extractor.extract(extractor.parse_document(html), url)
    except AppError:
        raise
    except Exception as e:
        logger.exception("scrape.parse_failed url=%s", url)
        raise UpstreamFetchError(str(e)) from e

    data = listing.model_dump(mode="json", by_alias=True)
    logger.info("scrape.extracted url=%s data=%s", url, data)
    return JSONResponse(data)
