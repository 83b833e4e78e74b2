"""
Unit Tests for Hierarchy Configuration
======================================
Tests for HierarchyConfig validation and HierarchyConfigManager persistence
"""
import json
from pathlib import Path

import pytest
import yaml

from ontoforest.config import (
    HierarchyConfig,
    HierarchyConfigManager,
    get_hierarchy_config_manager,
    reset_hierarchy_config_manager,
)
from ontoforest.core import DEFAULT_UNIVERSAL_ROOTS, OWL_THING, OWL_TOP_OBJECT_PROPERTY


# =============================================================================
# Test HierarchyConfig
# =============================================================================
class TestHierarchyConfig:
    """Tests for HierarchyConfig"""

    def test_defaults(self):
        config = HierarchyConfig()

        assert config.universal_roots == [OWL_THING, OWL_TOP_OBJECT_PROPERTY]
        assert config.universal_root_set == DEFAULT_UNIVERSAL_ROOTS
        assert config.log_removed_edges is True
        assert config.warn_on_duplicate_iris is True

    @pytest.mark.parametrize("roots", [[""], ["  "], [None], "http://example.org/Top"])
    def test_invalid_universal_roots(self, roots):
        with pytest.raises(ValueError):
            HierarchyConfig(universal_roots=roots).validate()

    def test_invalid_flag(self):
        with pytest.raises(ValueError, match="log_removed_edges"):
            HierarchyConfig(log_removed_edges="yes").validate()

    def test_empty_universal_roots_allowed(self):
        HierarchyConfig(universal_roots=[]).validate()

    def test_from_dict_ignores_unknown_keys(self, caplog):
        config = HierarchyConfig.from_dict({"log_removed_edges": False, "colour": "blue"})

        assert config.log_removed_edges is False
        assert "colour" in caplog.text

    def test_from_dict_normalizes_set(self):
        config = HierarchyConfig.from_dict({"universal_roots": {"http://b", "http://a"}})
        assert config.universal_roots == ["http://a", "http://b"]


# =============================================================================
# Test HierarchyConfigManager
# =============================================================================
class TestHierarchyConfigManager:
    """Tests for HierarchyConfigManager"""

    def test_update_parameter(self):
        manager = HierarchyConfigManager()
        result = manager.update_parameter("log_removed_edges", False)

        assert result["success"] is True
        assert manager.config.log_removed_edges is False

    def test_update_unknown_parameter(self):
        result = HierarchyConfigManager().update_parameter("universal_root_set", [])

        assert result["success"] is False
        assert "Unknown parameter" in result["error"]

    def test_update_invalid_value_keeps_config(self):
        manager = HierarchyConfigManager()
        result = manager.update_parameter("universal_roots", [""])

        assert result["success"] is False
        assert manager.config.universal_roots == [OWL_THING, OWL_TOP_OBJECT_PROPERTY]

    def test_yaml_round_trip(self, tmp_path: Path):
        manager = HierarchyConfigManager(HierarchyConfig(universal_roots=["http://example.org/Top"]))
        path = tmp_path / "configs" / "hierarchy.yaml"
        manager.save_to_yaml(path)

        with open(path) as f:
            raw = yaml.safe_load(f)
        assert raw["hierarchy"]["universal_roots"] == ["http://example.org/Top"]

        loaded = HierarchyConfigManager().load_from_yaml(path)
        assert loaded.universal_roots == ["http://example.org/Top"]

    def test_load_flat_yaml(self, tmp_path: Path):
        path = tmp_path / "hierarchy.yaml"
        path.write_text("warn_on_duplicate_iris: false\n")

        config = HierarchyConfigManager().load_from_yaml(path)
        assert config.warn_on_duplicate_iris is False
        assert config.universal_root_set == DEFAULT_UNIVERSAL_ROOTS

    def test_json_round_trip(self, tmp_path: Path):
        manager = HierarchyConfigManager(HierarchyConfig(log_removed_edges=False))
        path = tmp_path / "hierarchy.json"
        manager.save_to_json(path)

        assert json.loads(path.read_text())["version"] == "1.0"
        assert HierarchyConfigManager().load_from_json(path).log_removed_edges is False

    @pytest.mark.parametrize("content", ["- a\n- b\n", "hierarchy:\n", "hierarchy: [1, 2]\n"])
    def test_load_yaml_non_mapping(self, tmp_path: Path, content: str):
        path = tmp_path / "hierarchy.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match="mapping"):
            HierarchyConfigManager().load_from_yaml(path)

    def test_load_json_non_mapping(self, tmp_path: Path):
        path = tmp_path / "hierarchy.json"
        path.write_text(json.dumps([{"log_removed_edges": False}]))

        manager = HierarchyConfigManager()
        with pytest.raises(ValueError, match="mapping"):
            manager.load_from_json(path)
        assert manager.config.log_removed_edges is True

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            HierarchyConfigManager().load_from_yaml(tmp_path / "missing.yaml")
        with pytest.raises(FileNotFoundError):
            HierarchyConfigManager().load_from_json(tmp_path / "missing.json")

    def test_global_manager(self):
        manager = get_hierarchy_config_manager()
        assert get_hierarchy_config_manager() is manager

        reset_hierarchy_config_manager()
        assert get_hierarchy_config_manager() is not manager
