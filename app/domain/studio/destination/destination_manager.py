"""Output destination management."""

from loguru import logger

from app.domain.utils.idgen import new_destination_id
from app.schemas import Destination, DestinationCredentials, DestinationPlatform, ShareLink
from app.utils.studio_errors import StudioError, StudioErrorCode


def default_display_name(platform: DestinationPlatform) -> str:
    if platform == DestinationPlatform.CUSTOM:
        return "Custom RTMP"
    return f"{platform.value.capitalize()} Channel"


class DestinationManager:
    """Owns configured destinations and their connected/enabled flags.

    Enabling is only possible on a connected destination. Changes made while a
    broadcast is running apply to the next go-live only.
    """

    def __init__(self) -> None:
        self._destinations: dict[str, Destination] = {}

    def _require(self, destination_id: str) -> Destination:
        destination = self._destinations.get(destination_id)
        if destination is None:
            raise StudioError(
                errcode=StudioErrorCode.E_NOT_FOUND,
                errmesg=f"Destination not found: {destination_id}",
            )
        return destination

    def add_destination(
        self,
        platform: DestinationPlatform,
        credentials: DestinationCredentials | None = None,
        display_name: str | None = None,
    ) -> Destination:
        """Add a destination, connected and enabled.

        Raises:
            StudioError: E_INVALID_CREDENTIALS if a custom destination lacks a
                URL or stream key.
        """
        if platform == DestinationPlatform.CUSTOM:
            url = (credentials.url or "").strip() if credentials else ""
            key = (credentials.stream_key or "").strip() if credentials else ""
            if not url or not key:
                raise StudioError(
                    errcode=StudioErrorCode.E_INVALID_CREDENTIALS,
                    errmesg="Custom RTMP destinations require both a URL and a stream key",
                )
            credentials = DestinationCredentials(url=url, stream_key=key)
        else:
            # Platform destinations are authorized externally
            credentials = None

        destination = Destination(
            id=new_destination_id(),
            platform=platform,
            display_name=(display_name or "").strip() or default_display_name(platform),
            connected=True,
            enabled=True,
            credentials=credentials,
        )
        self._destinations[destination.id] = destination
        logger.info(f"Destination {destination.id} added (platform={platform})")
        return destination

    def get(self, destination_id: str) -> Destination:
        return self._require(destination_id)

    def toggle_enabled(self, destination_id: str) -> Destination:
        destination = self._require(destination_id)
        if not destination.enabled and not destination.connected:
            raise StudioError(
                errcode=StudioErrorCode.E_INVALID_CREDENTIALS,
                errmesg=f"Destination {destination_id} is not connected and cannot be enabled",
            )
        destination.enabled = not destination.enabled
        logger.info(f"Destination {destination_id} enabled={destination.enabled}")
        return destination

    def set_connected(self, destination_id: str, connected: bool) -> Destination:
        """Record the external authorization state; disconnecting also disables."""
        destination = self._require(destination_id)
        destination.connected = connected
        if not connected:
            destination.enabled = False
        logger.info(f"Destination {destination_id} connected={connected}")
        return destination

    def remove(self, destination_id: str) -> Destination:
        destination = self._require(destination_id)
        del self._destinations[destination_id]
        logger.info(f"Destination {destination_id} removed")
        return destination

    def list_destinations(self) -> list[Destination]:
        return list(self._destinations.values())

    def list_enabled(self) -> list[Destination]:
        return [d for d in self._destinations.values() if d.enabled]

    def share_links(self, channel_slug: str) -> list[ShareLink]:
        links = []
        for destination in self.list_enabled():
            url = destination.share_link(channel_slug)
            if url:
                links.append(
                    ShareLink(
                        destination_id=destination.id,
                        display_name=destination.display_name,
                        url=url,
                    )
                )
        return links
