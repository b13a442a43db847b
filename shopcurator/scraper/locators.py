"""
Locators: lisent une valeur candidate à un endroit du document parsé.
Chaque locator est une fonction (soup) -> Optional[str]; None = rien trouvé.
"""
from typing import Callable, Optional, Sequence

from bs4 import BeautifulSoup

Locator = Callable[[BeautifulSoup], Optional[str]]

# Attributs d'image, dans l'ordre: src principal, chargement différé, lazy-load
IMAGE_SRC_ATTRS = ("src", "data-src", "data-lazy-src")


def _attr(el, name: str) -> Optional[str]:
    value = el.get(name) if el is not None else None
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def meta(selector: str) -> Locator:
    """Lit l'attribut content du premier élément <meta> correspondant."""
    def _locate(soup: BeautifulSoup) -> Optional[str]:
        return _attr(soup.select_one(selector), "content")
    _locate.__name__ = f"meta({selector})"
    return _locate


def text(selector: str) -> Locator:
    """Lit le texte du premier élément correspondant."""
    def _locate(soup: BeautifulSoup) -> Optional[str]:
        el = soup.select_one(selector)
        if el is None:
            return None
        return el.get_text() or None
    _locate.__name__ = f"text({selector})"
    return _locate


def text_or_content(selector: str) -> Locator:
    """Texte du premier élément, sinon son attribut content (ex: microdata prix)."""
    def _locate(soup: BeautifulSoup) -> Optional[str]:
        el = soup.select_one(selector)
        if el is None:
            return None
        return el.get_text() or _attr(el, "content")
    _locate.__name__ = f"text_or_content({selector})"
    return _locate


def image(selector: str, attrs: Sequence[str] = IMAGE_SRC_ATTRS) -> Locator:
    """Premier attribut non vide parmi attrs sur le premier élément correspondant."""
    def _locate(soup: BeautifulSoup) -> Optional[str]:
        el = soup.select_one(selector)
        if el is None:
            return None
        for name in attrs:
            value = _attr(el, name)
            if value:
                return value
        return None
    _locate.__name__ = f"image({selector})"
    return _locate


def auto(selector: str, default: Callable[[str], Locator] = text) -> Locator:
    """Choisit meta() pour les sélecteurs <meta>, sinon le locator par défaut."""
    if selector.startswith("meta"):
        return meta(selector)
    return default(selector)
