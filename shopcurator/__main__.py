"""
Point d'entrée principal du service.

Usage:
    python -m shopcurator

Ce mode lance uvicorn directement et lit quelques variables d'environnement:
- HOST / PORT: interface et port d'écoute (par défaut 0.0.0.0:3001)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
"""
import os
import uvicorn

from shopcurator.config import HOST, LOG_LEVEL, PORT

if __name__ == "__main__":
    # Activer le reload uniquement si explicitement demandé (ex: en local)
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    uvicorn.run(
        "shopcurator.asgi:app",
        host=HOST,
        port=PORT,
        reload=reload_flag,
        log_level=LOG_LEVEL,
    )
