"""Maps bidding errors onto HTTP responses."""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api.schemas.bid_schemas import ErrorDetail, ErrorResponse
from src.domain.enums.error_kind import ErrorKind
from src.domain.errors import BiddingError

logger = structlog.get_logger(__name__)

# Anything not listed here is a client-side problem and answers 400
_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.GATEWAY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(status_code: int, details: list[ErrorDetail]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(errors=details).model_dump(mode="json"),
    )


async def bidding_error_handler(request: Request, exc: BiddingError) -> JSONResponse:
    status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    logger.info(
        "request_failed",
        path=request.url.path,
        kind=exc.kind.value,
        status_code=status_code,
        error=exc.message,
    )
    return _error_response(status_code, [ErrorDetail(kind=exc.kind, message=exc.message)])


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        ErrorDetail(
            kind=ErrorKind.VALIDATION,
            message=f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}",
        )
        for err in exc.errors()
    ]
    return _error_response(status.HTTP_400_BAD_REQUEST, details)


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage_error", path=request.url.path, error=str(exc))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        [ErrorDetail(kind=ErrorKind.STORAGE, message=str(exc))],
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BiddingError, bidding_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)  # type: ignore[arg-type]
