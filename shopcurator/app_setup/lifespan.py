"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Construit une seule fois le client Stripe et le range dans app.state
  (lu par la dépendance get_payment_provider).
- Journalise les points d'entrée au démarrage.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from shopcurator.config import API_PREFIX, PORT, STRIPE_WEBHOOK_SECRET
from shopcurator.payments.stripe_client import build_payment_provider

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    app.state.payment_provider = build_payment_provider()
    if not STRIPE_WEBHOOK_SECRET:
        logger.warning("STRIPE_WEBHOOK_SECRET manquant: toutes les signatures webhook seront rejetées")
    logger.info("Server running on port %s", PORT)
    logger.info("Scraper: POST %s/scrape", API_PREFIX)
    logger.info("Checkout: POST %s/checkout", API_PREFIX)

    yield

    app.state.payment_provider = None
