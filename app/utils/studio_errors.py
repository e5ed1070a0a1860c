"""Studio error taxonomy.

Every failure raised by the composition engine is a ``StudioError`` carrying a
stable error code and the HTTP status the API layer renders it with.
"""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class StudioErrorCode(str, Enum):
    E_NOT_FOUND = "E_NOT_FOUND"
    E_DUPLICATE_PARTICIPANT = "E_DUPLICATE_PARTICIPANT"
    E_EMPTY_TEXT = "E_EMPTY_TEXT"
    E_INVALID_CREDENTIALS = "E_INVALID_CREDENTIALS"
    E_RESOURCE_ACQUISITION_FAILED = "E_RESOURCE_ACQUISITION_FAILED"
    E_INVALID_TRANSITION = "E_INVALID_TRANSITION"
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"

    def __str__(self) -> str:
        return self.value


class StudioStatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


# Status used when a caller raises with only an error code
DEFAULT_STATUS: dict[StudioErrorCode, StudioStatusCode] = {
    StudioErrorCode.E_NOT_FOUND: StudioStatusCode.NOT_FOUND,
    StudioErrorCode.E_DUPLICATE_PARTICIPANT: StudioStatusCode.CONFLICT,
    StudioErrorCode.E_EMPTY_TEXT: StudioStatusCode.BAD_REQUEST,
    StudioErrorCode.E_INVALID_CREDENTIALS: StudioStatusCode.BAD_REQUEST,
    StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED: StudioStatusCode.SERVICE_UNAVAILABLE,
    StudioErrorCode.E_INVALID_TRANSITION: StudioStatusCode.CONFLICT,
    StudioErrorCode.E_INVALID_REQUEST: StudioStatusCode.BAD_REQUEST,
    StudioErrorCode.E_INTERNAL_ERROR: StudioStatusCode.INTERNAL_SERVER_ERROR,
}


class StudioError(Exception):
    """Domain error with an error code, message and HTTP status.

    The raising call site is captured so handlers can log where the error
    originated rather than where it was caught.
    """

    def __init__(
        self,
        errcode: StudioErrorCode,
        errmesg: str,
        status_code: StudioStatusCode | int | None = None,
    ):
        super().__init__(errmesg)
        self.code = errcode
        self.errcode = errcode.value
        self.errmesg = errmesg
        self.status_code = int(status_code or DEFAULT_STATUS[errcode])
        self.erresid = uuid4().hex[:10]

        caller_frame = inspect.stack()[1]
        self.caller_info = (
            f"{caller_frame.filename}:{caller_frame.function}:{caller_frame.lineno}"
        )

    def __repr__(self) -> str:
        return f"StudioError({self.errcode}, {self.errmesg!r}, {self.status_code})"
