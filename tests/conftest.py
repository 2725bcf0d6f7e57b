"""Root conftest.py - shared fixtures for all beatgrid tests"""

import pytest

from beatgrid_api.services.sequencer_service import set_sequencer_service


@pytest.fixture(autouse=True)
def _clear_sequencer_service():
    """Never leak the API's global sequencer service between tests"""
    yield
    set_sequencer_service(None)
