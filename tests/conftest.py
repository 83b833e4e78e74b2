"""
Shared pytest fixtures
"""
import pytest
from pathlib import Path

from ontoforest.config import reset_hierarchy_config_manager


@pytest.fixture(autouse=True)
def reset_config_manager():
    """Each test starts from the default global configuration"""
    reset_hierarchy_config_manager()
    yield
    reset_hierarchy_config_manager()


@pytest.fixture
def fixtures_dir() -> Path:
    """獲取 fixtures 目錄路徑"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def mini_entities_path(fixtures_dir: Path) -> Path:
    """獲取 mini 實體檔案路徑"""
    return fixtures_dir / "mini_entities.json"
