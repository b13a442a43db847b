"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `shopcurator.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, handlers) est centralisée
  dans shopcurator.app, ce fichier ne fait qu'exposer l'instance `app`.
"""

from shopcurator.app import app

if __name__ == "__main__":
    import uvicorn
    from shopcurator.config import HOST, PORT

    uvicorn.run(
        "shopcurator.asgi:app",
        host=HOST,
        port=PORT,
        reload=True,     # rechargement automatique en dev
    )
