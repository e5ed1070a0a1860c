from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from loguru import logger

from app.shared.api.errors import E_INVALID_PARAMS
from app.shared.api.utils import ApiFailure, api_failure, make_response
from app.utils.studio_errors import StudioError, StudioErrorCode


async def studio_error_handler(request: Request, exc: StudioError) -> ORJSONResponse:
    """
    Custom exception handler for StudioError.
    Converts StudioError to ApiFailure and returns via make_response.
    """
    # Log with the caller info captured when StudioError was raised
    log_msg = f"{exc.errcode} {exc.erresid} msg={exc.errmesg} caller={exc.caller_info}"
    if exc.errcode == StudioErrorCode.E_INTERNAL_ERROR.value:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=exc.errcode, errmesg=exc.errmesg, erresid=exc.erresid)
    return make_response(failure, status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    errors = exc.errors()

    logger.warning(
        "Validation error: path={} method={} errors={}",
        request.url.path,
        request.method,
        errors,
    )

    failure = api_failure(E_INVALID_PARAMS, errmesg=str(errors))

    return ORJSONResponse(status_code=422, content=failure.model_dump())
