import pytest
from click.testing import CliRunner
from electric_case.host import TextBuffer
from electric_case.preview import PendingMarks


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def buffer() -> TextBuffer:
    """An empty in-memory host buffer."""
    return TextBuffer()


@pytest.fixture()
def warnings_seen() -> list[str]:
    """Collects messages passed to a `warn` callback via ``warnings_seen.append``."""
    return []


@pytest.fixture()
def marks(buffer) -> PendingMarks:
    return PendingMarks(buffer)
