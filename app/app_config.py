from pydantic import BaseModel

from app.shared.config import config


class AppEnvironConfig(BaseModel):
    # Public demo switch: when enabled, capture and transport use in-process stubs.
    DEMO_MODE: bool = config.get("DEMO_MODE", "true").strip().lower() == "true"  # type: ignore

    # Studio configuration
    STUDIO_HOST_NAME: str = (config.get("STUDIO_HOST_NAME") or "").strip() or "You (Host)"
    STUDIO_CHANNEL_SLUG: str = (config.get("STUDIO_CHANNEL_SLUG") or "").strip() or "founder-storys"
    STUDIO_TICK_SECONDS: float = config.get_tick_seconds()
    # When True, a new studio starts with the local camera and the default banners
    STUDIO_SEED_DEFAULTS: bool = (
        config.get("STUDIO_SEED_DEFAULTS", "true").strip().lower() == "true"  # type: ignore
    )


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
