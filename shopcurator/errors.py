"""
Taxonomie des erreurs applicatives.
Chaque erreur porte son code HTTP et un libellé public; la conversion en
réponse est faite par les handlers de shopcurator.app_setup.exceptions.
"""
from typing import Optional


class AppError(Exception):
    status_code = 500
    error = "Internal error"

    def __init__(self, message: str = "", error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error:
            self.error = error


class ValidationError(AppError):
    """Entrée appelant absente ou invalide (400)."""
    status_code = 400
    error = "Invalid request"


class UpstreamFetchError(AppError):
    """Page cible injoignable, timeout ou statut HTTP non-2xx (500)."""
    status_code = 500
    error = "Failed to scrape product"


class ProviderError(AppError):
    """Échec de l'appel au fournisseur de paiement (500, message générique)."""
    status_code = 500
    error = "Failed to create checkout session"


class SignatureError(AppError):
    """Signature webhook invalide ou payload illisible (400)."""
    status_code = 400
    error = "Webhook Error"
