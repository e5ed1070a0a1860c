from fastapi import APIRouter, Depends

from app.api.v1.dependency import get_session_controller
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.studio import BannerIdIn, BannerOut, SubmitBannerIn
from app.domain.studio.session.session_controller import SessionController
from app.schemas import Banner

router = APIRouter(prefix="/studio/banner")


def _banner_out(banner: Banner) -> BannerOut:
    return BannerOut(
        banner_id=banner.id,
        text=banner.text,
        style=banner.style,
        is_active=banner.is_active,
    )


@router.get("/list_banners")
async def list_banners(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[list[BannerOut]]:
    return ApiOut[list[BannerOut]](
        results=[_banner_out(b) for b in controller.overlays.list_banners()]
    )


@router.post("/submit_banner")
async def submit_banner(
    body: SubmitBannerIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[BannerOut]:
    """Create a banner; it becomes the only active one."""
    banner = controller.submit_banner(body.text, body.style)
    return ApiOut[BannerOut](results=_banner_out(banner))


@router.post("/toggle_banner")
async def toggle_banner(
    body: BannerIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[BannerOut]:
    """Show the banner (hiding any other), or hide it if it is showing."""
    banner = controller.toggle_banner(body.banner_id)
    return ApiOut[BannerOut](results=_banner_out(banner))


@router.post("/remove_banner")
async def remove_banner(
    body: BannerIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    removed = controller.remove_banner(body.banner_id)
    return ApiOut[bool](results=removed is not None)
