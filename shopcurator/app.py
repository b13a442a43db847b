# module shopcurator.app
from fastapi import FastAPI

from shopcurator.app_setup.exceptions import register_exception_handlers
from shopcurator.app_setup.lifespan import lifespan
from shopcurator.app_setup.middlewares import register_basic_middlewares
from shopcurator.app_setup.routers import register_routers

def create_app() -> FastAPI:
    """
    Crée et configure l'instance FastAPI de l'application.
    Étapes:
      1) register_basic_middlewares: CORS, ProxyHeaders.
      2) register_exception_handlers: taxonomie d'erreurs -> réponses JSON/texte.
      3) register_routers: scraper, payments, health.
    Retourne:
      - FastAPI: l'application prête à être servie (ASGI).
    """
    app = FastAPI(title="Product Scraper API", lifespan=lifespan)
    register_basic_middlewares(app)
    register_exception_handlers(app)
    register_routers(app)
    return app

# App globale
app = create_app()
