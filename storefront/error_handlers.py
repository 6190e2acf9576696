import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.exceptions import ErrorKind, StorefrontError
from storefront.utils.responses import error_body

logger = logging.getLogger(__name__)

# every ErrorKind must appear here
ERROR_STATUS = {
    ErrorKind.CART_EMPTY: 400,
    ErrorKind.CART_ITEM_NOT_FOUND: 404,
    ErrorKind.ORDER_NOT_FOUND: 404,
    ErrorKind.ORDER_ALREADY_PAID: 409,
    ErrorKind.PAYMENT_NOT_FOUND: 404,
    ErrorKind.PAYMENT_NOT_COMPLETED: 400,
    ErrorKind.INVOICE_ALREADY_EXISTS: 409,
    ErrorKind.INVOICE_NOT_FOUND: 404,
    ErrorKind.INVALID_STATUS_TRANSITION: 400,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


async def storefront_error_handler(request: Request, exc: StorefrontError):
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content=error_body(exc.kind.value, exc.message),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_body(
            "VALIDATION_ERROR",
            "Validation failed",
            jsonable_encoder(exc.errors()),
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
