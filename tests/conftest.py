from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from tests.helpers import RecordingHandler

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def handler() -> RecordingHandler:
    """Create an empty handler for httpx.MockTransport.

    Tests queue the outcomes of the successive attempts with
    ``handler.queue(...)`` and inspect ``handler.requests`` afterwards.
    """
    return RecordingHandler()
