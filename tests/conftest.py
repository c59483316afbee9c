import pytest
from click.testing import CliRunner

from md_to_html.filesystem import MAX_FILE_SIZE_ENV_VAR


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner for md-to-html."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_size_limit(monkeypatch):
    """Keeps a size limit set in the caller's environment out of the tests."""
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
