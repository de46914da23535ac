import pytest


@pytest.fixture
def anyio_backend() -> str:
    # Reader fan-out relies on asyncio.to_thread.
    return "asyncio"
