from typing import Generic, TypeVar

from app.shared.api.utils import ApiSuccess

T = TypeVar("T")


class ApiOut(ApiSuccess, Generic[T]):
    """Success envelope of the studio routers; `results` carries the typed payload."""

    results: T  # type: ignore[valid-type]
