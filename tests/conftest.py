from __future__ import annotations

import pytest
import structlog

from faultline.context import get_context
from faultline.errors import runtime


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Each test starts with no installed runtime and an empty registry."""
    runtime.reset()
    get_context().reset()
    yield
    runtime.reset()
    get_context().reset()
    structlog.reset_defaults()
