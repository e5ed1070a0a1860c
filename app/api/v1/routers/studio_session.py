from fastapi import APIRouter, Depends

from app.api.v1.dependency import get_session_controller
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.studio import SessionModeOut, SetLayoutIn
from app.domain.studio.session.session_controller import SessionController
from app.schemas import SessionViewModel, StudioSettings, StudioSettingsUpdate

router = APIRouter(prefix="/studio/session")


def _mode_out(controller: SessionController) -> ApiOut[SessionModeOut]:
    return ApiOut[SessionModeOut](
        results=SessionModeOut(
            session_id=controller.session_id,
            session_mode=controller.mode,
            elapsed_seconds=controller.elapsed_seconds,
            warnings=controller.warnings(),
        )
    )


@router.get("/get_view_model")
async def get_view_model(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionViewModel]:
    """Get the composed studio state for rendering."""
    return ApiOut[SessionViewModel](results=controller.get_view_model())


@router.post("/go_live")
async def go_live(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    """Start broadcasting. Allowed with no enabled destinations (reported as a warning)."""
    controller.go_live()
    return _mode_out(controller)


@router.post("/stop_broadcast")
async def stop_broadcast(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    controller.stop_broadcast()
    return _mode_out(controller)


@router.post("/start_recording")
async def start_recording(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    controller.start_recording()
    return _mode_out(controller)


@router.post("/stop_recording")
async def stop_recording(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    controller.stop_recording()
    return _mode_out(controller)


@router.post("/toggle_live")
async def toggle_live(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    """Single live button: go live, or stop the broadcast if already live."""
    controller.toggle_live()
    return _mode_out(controller)


@router.post("/toggle_recording")
async def toggle_recording(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionModeOut]:
    controller.toggle_recording()
    return _mode_out(controller)


@router.post("/set_layout")
async def set_layout(
    body: SetLayoutIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[SessionViewModel]:
    controller.set_layout(body.layout)
    return ApiOut[SessionViewModel](results=controller.get_view_model())


@router.get("/get_settings")
async def get_settings(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[StudioSettings]:
    return ApiOut[StudioSettings](results=controller.settings)


@router.post("/update_settings")
async def update_settings(
    body: StudioSettingsUpdate,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[StudioSettings]:
    """Partially update studio settings; omitted fields are unchanged."""
    return ApiOut[StudioSettings](results=controller.update_settings(body))
