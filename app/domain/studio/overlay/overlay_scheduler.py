"""Banner overlay scheduling."""

from loguru import logger

from app.domain.utils.idgen import new_banner_id
from app.schemas import Banner, BannerStyle
from app.utils.studio_errors import StudioError, StudioErrorCode


class OverlayScheduler:
    """Owns the banners and which single one, if any, is active.

    Every activation deactivates all other banners in the same step, so at
    most one banner is active after any call.
    """

    def __init__(self) -> None:
        self._banners: dict[str, Banner] = {}

    def _activate_only(self, banner_id: str | None) -> None:
        for banner in self._banners.values():
            banner.is_active = banner.id == banner_id

    def submit_banner(self, text: str, style: BannerStyle = BannerStyle.STATIC) -> Banner:
        """Create a banner and make it the sole active one.

        Raises:
            StudioError: E_EMPTY_TEXT if the text is blank after trimming.
        """
        text = (text or "").strip()
        if not text:
            raise StudioError(
                errcode=StudioErrorCode.E_EMPTY_TEXT,
                errmesg="Banner text must not be empty",
            )

        banner = Banner(id=new_banner_id(), text=text, style=style)
        self._banners[banner.id] = banner
        self._activate_only(banner.id)
        logger.info(f"Banner {banner.id} submitted and activated (style={style})")
        return banner

    def toggle_active(self, banner_id: str) -> Banner:
        """Activate an inactive banner (deactivating others) or deactivate an active one."""
        banner = self._banners.get(banner_id)
        if banner is None:
            raise StudioError(
                errcode=StudioErrorCode.E_NOT_FOUND,
                errmesg=f"Banner not found: {banner_id}",
            )

        if banner.is_active:
            banner.is_active = False
            logger.info(f"Banner {banner_id} deactivated")
        else:
            self._activate_only(banner_id)
            logger.info(f"Banner {banner_id} activated")
        return banner

    def remove_banner(self, banner_id: str) -> Banner | None:
        banner = self._banners.pop(banner_id, None)
        if banner is not None:
            logger.info(f"Banner {banner_id} removed")
        return banner

    def list_banners(self) -> list[Banner]:
        return list(self._banners.values())

    def active_banner(self) -> Banner | None:
        for banner in self._banners.values():
            if banner.is_active:
                return banner
        return None
