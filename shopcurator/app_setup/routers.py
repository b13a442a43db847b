"""
Registre central des routers (scraper, payments, health).
"""
from fastapi import FastAPI
from shopcurator.scraper import views as scraper_views
from shopcurator.payments import views as payments_views
from shopcurator.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact: chaque route a un chemin distinct sous API_PREFIX.
    """
    app.include_router(scraper_views.router)
    app.include_router(payments_views.router)
    app.include_router(health_router)
