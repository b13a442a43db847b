"""
Gestionnaires d'exceptions: convertit la taxonomie shopcurator.errors en réponses.
- ValidationError    -> 400 {"error"}
- UpstreamFetchError -> 500 {"error", "message"}
- ProviderError      -> 500 {"error"} (message Stripe jamais renvoyé)
- SignatureError     -> 400 texte "Webhook Error: <message>"
Rien n'est relancé ni fatal au processus.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from shopcurator import config
from shopcurator.errors import AppError, ProviderError, SignatureError, UpstreamFetchError

logger = logging.getLogger(__name__)

GENERIC_UPSTREAM_MESSAGE = "The product page could not be retrieved"
GENERIC_SIGNATURE_MESSAGE = "invalid signature"

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers de la taxonomie applicative et des erreurs de validation FastAPI.
    - EXPOSE_ERROR_DETAILS=false masque les messages bruts (toujours journalisés).
    """
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, SignatureError):
            logger.warning("webhook.signature_rejected path=%s error=%s", request.url.path, exc.message)
            message = exc.message if config.EXPOSE_ERROR_DETAILS else GENERIC_SIGNATURE_MESSAGE
            return PlainTextResponse(f"Webhook Error: {message}", status_code=exc.status_code)

        if isinstance(exc, UpstreamFetchError):
            logger.error("scrape.error path=%s error=%s", request.url.path, exc.message)
            message = exc.message if config.EXPOSE_ERROR_DETAILS else GENERIC_UPSTREAM_MESSAGE
            return JSONResponse(status_code=exc.status_code, content={"error": exc.error, "message": message})

        if isinstance(exc, ProviderError):
            logger.error("payments.provider_error path=%s error=%s", request.url.path, exc.message)

        return JSONResponse(status_code=exc.status_code, content={"error": exc.error})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
        )
