# shopcurator.config
from decimal import Decimal
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH)

"""
Configuration centrale du service.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets Stripe, le port d'écoute et le préfixe d'API
- Paramètres du scraping (timeout) et du checkout (devise, pays, frais)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_flag(name: str, default: str) -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

# Stripe: clé secrète (placeholder de test par défaut) et secret de signature webhook
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "sk_test_YOUR_KEY_HERE")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")

# Serveur
HOST = _clean_env(os.getenv("HOST") or "0.0.0.0")
PORT = int(_clean_env(os.getenv("PORT") or "3001"))
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info").lower()
API_PREFIX = "/" + _clean_env(os.getenv("API_PREFIX") or "/api").strip("/")

# CORS (le service d'origine acceptait toutes les origines)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Scraping
SCRAPE_TIMEOUT_SECONDS = float(_clean_env(os.getenv("SCRAPE_TIMEOUT_SECONDS") or "10"))

# Checkout: devise, origine de repli pour les redirections, pays livrables, frais
CHECKOUT_CURRENCY = _clean_env(os.getenv("CHECKOUT_CURRENCY") or "usd").lower()
CHECKOUT_FALLBACK_ORIGIN = _clean_env(os.getenv("CHECKOUT_FALLBACK_ORIGIN") or "http://localhost:3000").rstrip("/")
SHIPPING_COUNTRIES = [
    c.strip().upper() for c in os.getenv("SHIPPING_COUNTRIES", "US,CA,GB,AU").split(",") if c.strip()
]
FEE_RATE = Decimal(_clean_env(os.getenv("FEE_RATE") or "0.10"))

# Exposer ou non le message brut des erreurs amont/signature dans les réponses
EXPOSE_ERROR_DETAILS = _env_flag("EXPOSE_ERROR_DETAILS", "true")
