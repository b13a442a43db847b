"""
Module 'scraper' (feature-first): point d'entrée public.
Réunit la récupération HTTP, les locators et l'extraction de fiche produit.
"""

from .extractor import (
    extract,
    extract_name,
    extract_price,
    extract_image,
    extract_description,
    parse_document,
)
from .fetcher import PageFetcher, get_fetcher
from .models import ProductListing, ScrapeRequest

__all__ = [
    # extraction
    "extract",
    "extract_name",
    "extract_price",
    "extract_image",
    "extract_description",
    "parse_document",
    # fetch
    "PageFetcher",
    "get_fetcher",
    # models
    "ProductListing",
    "ScrapeRequest",
]
