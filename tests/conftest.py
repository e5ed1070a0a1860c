import os
import sys
import warnings
from pathlib import Path

import pytest

# Ignore warnings from app.shared
warnings.filterwarnings("ignore", category=DeprecationWarning, module="app.shared.*")

# Set test environment variables
os.environ.update({"DEMO_MODE": "true", "LOGFIRE_ENABLE": "false"})

# Ensure project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from app.domain.studio.session.session_controller import SessionController  # noqa: E402
from app.services.integrations.broadcast_transport import LoggingBroadcastTransport  # noqa: E402
from app.services.integrations.capture_service import StubCaptureProvider  # noqa: E402


@pytest.fixture
def capture() -> StubCaptureProvider:
    """In-process capture provider that grants every request."""
    return StubCaptureProvider()


@pytest.fixture
def transport() -> LoggingBroadcastTransport:
    """Transport stub recording every finalized session."""
    return LoggingBroadcastTransport()


@pytest.fixture
def controller(capture: StubCaptureProvider, transport: LoggingBroadcastTransport) -> SessionController:
    """Session controller seeded with the local camera and default banners."""
    return SessionController(capture=capture, transport=transport)


@pytest.fixture
def empty_controller(capture: StubCaptureProvider, transport: LoggingBroadcastTransport) -> SessionController:
    """Session controller with no participants and no banners."""
    return SessionController(capture=capture, transport=transport, seed_defaults=False)
