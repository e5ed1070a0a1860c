"""Banner overlay schema."""

from pydantic import BaseModel

from .studio_types import BannerStyle


class Banner(BaseModel):
    id: str
    text: str
    style: BannerStyle = BannerStyle.STATIC
    is_active: bool = False
