from loguru import logger

from app.domain.studio.session.session_controller import SessionController
from app.domain.studio.studio_factory import create_session_controller

# One broadcast session per process
_session_controller: SessionController | None = None


def get_session_controller() -> SessionController:
    """Get the process-wide SessionController, creating it on first use."""
    global _session_controller
    if _session_controller is None:
        _session_controller = create_session_controller()
        logger.info("Session controller created: {}", _session_controller.session_id)
    return _session_controller
