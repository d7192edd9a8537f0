import os

# No simulated inference latency in tests
os.environ.setdefault("IMAGE_PROCESSING_DELAY_SECONDS", "0")

import pytest

from oncotriage.tools.inference import MockInferenceProvider
from oncotriage.services.session_service import SessionService


@pytest.fixture
def provider():
    return MockInferenceProvider(image_delay_seconds=0)


@pytest.fixture
def session_service():
    return SessionService(max_sessions=10)
