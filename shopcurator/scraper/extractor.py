"""
Extraction heuristique d'une fiche produit (name, price, image, description).

Chaque champ est une chaîne de repli ordonnée: on essaie les locators dans
l'ordre, on normalise la valeur, et la première qui passe le validateur gagne.
Si aucune ne convient, on renvoie la valeur par défaut du champ (jamais
d'exception). L'ordre va des métadonnées structurées (confiance haute) vers
les heuristiques génériques (h1, title).
"""
import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from . import locators as loc
from .locators import Locator
from .models import ProductListing

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown Product"
MAX_NAME_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 500
MIN_DESCRIPTION_LENGTH = 10
MAX_PRICE = Decimal("100000")
REJECTED_IMAGE_MARKERS = ("icon", "logo", "1x1")

PRICE_PATTERN = re.compile(r"[\d,]+\.?\d*")
_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class FieldChain:
    """
    Table de repli d'un champ.
    - locators: lus de gauche à droite
    - normalize(raw, source_url) -> valeur ou None (None = candidat ignoré)
    - validate(valeur) -> bool
    - default: renvoyé si aucun candidat ne passe
    """
    name: str
    locators: Sequence[Locator]
    normalize: Callable[[str, str], Any]
    validate: Callable[[Any], bool]
    default: Any

    def run(self, soup: BeautifulSoup, source_url: str) -> Any:
        for locate in self.locators:
            try:
                raw = locate(soup)
                if not raw:
                    continue
                value = self.normalize(raw, source_url)
            except Exception:
                logger.debug("extract.locator_failed field=%s locator=%s", self.name, getattr(locate, "__name__", locate), exc_info=True)
                continue
            if value is not None and self.validate(value):
                return value
        return self.default


# Normaliseurs
def collapse_whitespace(raw: str, source_url: str = "") -> str:
    return " ".join(raw.split())

def parse_price(raw: str, source_url: str = "") -> Optional[Decimal]:
    """Premier motif numérique (chiffres, virgules, un point optionnel), virgules retirées."""
    match = PRICE_PATTERN.search(raw)
    if not match:
        return None
    try:
        return Decimal(match.group(0).replace(",", ""))
    except InvalidOperation:
        return None

def _origin(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        raise ValueError(f"URL source sans origine: {url!r}")
    host = parsed.hostname
    # urlparse retire les crochets des adresses IPv6
    if ":" in host:
        host = f"[{host}]"
    origin = f"{parsed.scheme}://{host}"
    if parsed.port and parsed.port != _DEFAULT_PORTS.get(parsed.scheme):
        origin += f":{parsed.port}"
    return origin

def normalize_image_url(raw: str, source_url: str) -> str:
    """
    - "//cdn/x.jpg" -> "https://cdn/x.jpg"
    - "/img/x.jpg"  -> "<origine de source_url>/img/x.jpg"
    - sinon inchangé
    """
    if raw.startswith("//"):
        return "https:" + raw
    if raw.startswith("/"):
        return _origin(source_url) + raw
    return raw


# Validateurs
def is_valid_name(value: str) -> bool:
    return 0 < len(value) < MAX_NAME_LENGTH

def is_valid_price(value: Decimal) -> bool:
    return Decimal("0") < value < MAX_PRICE

def is_valid_image(value: str) -> bool:
    return not any(marker in value for marker in REJECTED_IMAGE_MARKERS)

def is_valid_description(value: str) -> bool:
    return len(value) > MIN_DESCRIPTION_LENGTH


NAME_SELECTORS = (
    'meta[property="og:title"]',
    'meta[name="twitter:title"]',
    "#productTitle",
    "#title",
    '[data-testid="product-title"]',
    ".product-title",
    ".product-name",
    ".product_title",
    "h1.title",
    'h1[itemprop="name"]',
    '[itemprop="name"]',
    "h1",
    "title",
)

PRICE_SELECTORS = (
    '[itemprop="price"]',
    'meta[itemprop="price"]',
    ".a-price .a-offscreen",
    "#priceblock_ourprice",
    "#priceblock_dealprice",
    ".a-price-whole",
    '[data-testid="product-price"]',
    ".product-price",
    ".price",
    ".current-price",
    ".sale-price",
    ".regular-price",
    ".product_price",
    'meta[property="product:price:amount"]',
    'meta[property="og:price:amount"]',
)

IMAGE_SELECTORS = (
    'meta[property="og:image"]',
    'meta[property="og:image:secure_url"]',
    'meta[name="twitter:image"]',
    "#landingImage",
    "#imgBlkFront",
    "#main-image",
    '[data-testid="product-image"] img',
    ".product-image img",
    ".product-gallery img",
    ".gallery-image",
    '[itemprop="image"]',
    ".main-image img",
    "#product-image",
    'img[src*="product"]',
    'img[src*="upload"]',
)

DESCRIPTION_SELECTORS = (
    'meta[property="og:description"]',
    'meta[name="description"]',
    '[itemprop="description"]',
    ".product-description",
    "#product-description",
)

NAME_CHAIN = FieldChain(
    name="name",
    locators=[loc.auto(s) for s in NAME_SELECTORS],
    normalize=collapse_whitespace,
    validate=is_valid_name,
    default=UNKNOWN_NAME,
)

PRICE_CHAIN = FieldChain(
    name="price",
    locators=[loc.auto(s, default=loc.text_or_content) for s in PRICE_SELECTORS],
    normalize=parse_price,
    validate=is_valid_price,
    default=Decimal("0"),
)

IMAGE_CHAIN = FieldChain(
    name="image",
    locators=[loc.auto(s, default=loc.image) for s in IMAGE_SELECTORS],
    normalize=normalize_image_url,
    validate=is_valid_image,
    default="",
)

DESCRIPTION_CHAIN = FieldChain(
    name="description",
    locators=[loc.auto(s) for s in DESCRIPTION_SELECTORS],
    normalize=collapse_whitespace,
    validate=is_valid_description,
    default="",
)


def extract_name(soup: BeautifulSoup, source_url: str = "") -> str:
    return NAME_CHAIN.run(soup, source_url)

def extract_price(soup: BeautifulSoup, source_url: str = "") -> Decimal:
    return PRICE_CHAIN.run(soup, source_url)

def extract_image(soup: BeautifulSoup, source_url: str) -> str:
    return IMAGE_CHAIN.run(soup, source_url)

def extract_description(soup: BeautifulSoup, source_url: str = "") -> str:
    return DESCRIPTION_CHAIN.run(soup, source_url)[:MAX_DESCRIPTION_LENGTH]


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def extract(soup: BeautifulSoup, source_url: str) -> ProductListing:
    """
    Exécute les quatre chaînes indépendantes et construit la fiche produit.
    Un échec dans une chaîne n'affecte jamais les autres.
    """
    return ProductListing(
        name=extract_name(soup, source_url),
        price=extract_price(soup, source_url),
        image=extract_image(soup, source_url),
        description=extract_description(soup, source_url),
        source_url=source_url,
    )
