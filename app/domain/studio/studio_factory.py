from app.app_config import get_app_environ_config
from app.domain.studio.session.session_controller import SessionController
from app.services.integrations.broadcast_transport import get_broadcast_transport
from app.services.integrations.capture_service import get_capture_provider


def create_session_controller() -> SessionController:
    """Build a session controller wired to the configured collaborators."""
    cfg = get_app_environ_config()
    return SessionController(
        capture=get_capture_provider(),
        transport=get_broadcast_transport(),
        host_name=cfg.STUDIO_HOST_NAME,
        channel_slug=cfg.STUDIO_CHANNEL_SLUG,
        seed_defaults=cfg.STUDIO_SEED_DEFAULTS,
    )
