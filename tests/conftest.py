"""Shared fixtures."""

from unittest.mock import AsyncMock

import pytest

from formulaic.transport import Transport


@pytest.fixture
def transport():
    """Transport double recording every request."""
    return AsyncMock(spec=Transport)
