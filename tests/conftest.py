import pytest

from gwbm.balance import fit_models
from gwbm.config import BalanceConfig
from gwbm.pipeline import run_pipeline


@pytest.fixture
def default_config():
    return BalanceConfig()


@pytest.fixture
def models(default_config):
    return fit_models(default_config)


@pytest.fixture
def result(default_config):
    return run_pipeline(default_config)


@pytest.fixture
def config_file(tmp_path):
    """Write a JSON config and return its path."""
    def _write(text):
        path = tmp_path / "config.json"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
