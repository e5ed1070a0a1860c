from fastapi import APIRouter, Depends

from app.api.v1.dependency import get_session_controller
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.studio import (
    AddDestinationIn,
    DestinationIdIn,
    DestinationOut,
    SetConnectedIn,
)
from app.domain.studio.session.session_controller import SessionController
from app.schemas import Destination, DestinationCredentials, ShareLink

router = APIRouter(prefix="/studio/destination")


def _destination_out(destination: Destination) -> DestinationOut:
    return DestinationOut(
        destination_id=destination.id,
        platform=destination.platform,
        display_name=destination.display_name,
        connected=destination.connected,
        enabled=destination.enabled,
    )


@router.get("/list_destinations")
async def list_destinations(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[list[DestinationOut]]:
    return ApiOut[list[DestinationOut]](
        results=[_destination_out(d) for d in controller.destinations.list_destinations()]
    )


@router.get("/list_enabled")
async def list_enabled(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[list[DestinationOut]]:
    return ApiOut[list[DestinationOut]](
        results=[_destination_out(d) for d in controller.destinations.list_enabled()]
    )


@router.get("/share_links")
async def share_links(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[list[ShareLink]]:
    """Public watch links of the enabled destinations."""
    return ApiOut[list[ShareLink]](
        results=controller.destinations.share_links(controller.channel_slug)
    )


@router.post("/add_destination")
async def add_destination(
    body: AddDestinationIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[DestinationOut]:
    """Add a destination, connected and enabled. Custom RTMP needs url and stream_key."""
    credentials = None
    if body.url is not None or body.stream_key is not None:
        credentials = DestinationCredentials(url=body.url, stream_key=body.stream_key)

    destination = controller.add_destination(
        body.platform,
        credentials=credentials,
        display_name=body.display_name,
    )
    return ApiOut[DestinationOut](results=_destination_out(destination))


@router.post("/toggle_destination")
async def toggle_destination(
    body: DestinationIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[DestinationOut]:
    """Flip the enabled flag. Takes effect on the next go-live."""
    destination = controller.toggle_destination(body.destination_id)
    return ApiOut[DestinationOut](results=_destination_out(destination))


@router.post("/set_connected")
async def set_connected(
    body: SetConnectedIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[DestinationOut]:
    destination = controller.set_destination_connected(body.destination_id, body.connected)
    return ApiOut[DestinationOut](results=_destination_out(destination))


@router.post("/remove_destination")
async def remove_destination(
    body: DestinationIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[DestinationOut]:
    destination = controller.remove_destination(body.destination_id)
    return ApiOut[DestinationOut](results=_destination_out(destination))
