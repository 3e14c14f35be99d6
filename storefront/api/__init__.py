# storefront/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.errors import StorageFault, StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _internal_error() -> JSONResponse:
    fault = StorageFault()
    return JSONResponse(status_code=fault.status_code, content=fault.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """
    Bledy domenowe -> {error_kind, message, details} z ich statusem HTTP.
    Bledy bazy i wszystko nieoczekiwane -> 500 z ogolnym komunikatem,
    szczegoly tylko w logu.
    """

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc!r}")
        return _internal_error()

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return _internal_error()
