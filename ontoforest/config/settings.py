"""
OntoForest Hierarchy Configuration
==================================
Centralized settings for hierarchy extraction.

Module: ontoforest/config/settings.py

Purpose:
    Provide a small configuration layer that:
    - Defines the universal root (sentinel) IRIs excluded from every forest
    - Controls diagnostic logging of the extraction pass
    - Persists configurations to YAML/JSON files
    - Validates values before they reach the extractor

Components:
    - HierarchyConfig: Extraction settings
    - HierarchyConfigManager: Update / persistence wrapper
    - get_hierarchy_config_manager: Global manager instance

Dependencies:
    - yaml: Configuration file I/O
    - json: JSON export

Called by:
    - ontoforest/ontology/hierarchy.py (default sentinel set)
    - scripts/extract_hierarchy.py (--config)

Version: 1.0.0
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Union

import yaml

from ontoforest.core.types import DEFAULT_UNIVERSAL_ROOTS

logger = logging.getLogger(__name__)


# =============================================================================
# Hierarchy Configuration
# =============================================================================
@dataclass
class HierarchyConfig:
    """
    Hierarchy extraction settings

    universal_roots defaults to owl:Thing and owl:TopObjectProperty.
    Entities with these IRIs never appear in the extracted forest, and
    edges pointing at them are treated as "no parent".
    """
    universal_roots: List[str] = field(
        default_factory=lambda: sorted(DEFAULT_UNIVERSAL_ROOTS)
    )

    # Diagnostics
    log_removed_edges: bool = True
    warn_on_duplicate_iris: bool = True

    @property
    def universal_root_set(self) -> FrozenSet[str]:
        return frozenset(self.universal_roots)

    def validate(self) -> None:
        """Raise ValueError if any setting is invalid"""
        if not isinstance(self.universal_roots, (list, tuple, set, frozenset)):
            raise ValueError(
                f"universal_roots must be a list of IRIs, got {type(self.universal_roots).__name__}"
            )
        for iri in self.universal_roots:
            if not isinstance(iri, str) or not iri.strip():
                raise ValueError(f"Invalid universal root IRI: {iri!r}")
        for name in ("log_removed_edges", "warn_on_duplicate_iris"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HierarchyConfig":
        """Build from a dict, ignoring unknown keys"""
        if not isinstance(data, dict):
            raise ValueError(
                f"Hierarchy config must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown hierarchy config keys: {sorted(unknown)}")

        config = cls(**{k: v for k, v in data.items() if k in known})
        if isinstance(config.universal_roots, (set, frozenset, tuple)):
            config.universal_roots = sorted(config.universal_roots)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# Configuration Manager
# =============================================================================
class HierarchyConfigManager:
    """
    Central manager for hierarchy settings

    Usage:
        manager = get_hierarchy_config_manager()
        manager.update_parameter("log_removed_edges", False)
        manager.save_to_yaml("configs/hierarchy.yaml")
    """

    def __init__(self, config: Optional[HierarchyConfig] = None):
        self.config = config or HierarchyConfig()

    def get_current_values(self) -> Dict[str, Any]:
        return self.config.to_dict()

    def update_parameter(self, name: str, value: Any) -> Dict[str, Any]:
        """
        Update a single setting

        Args:
            name: Setting name
            value: New value

        Returns:
            Dict with success status and error message if rejected
        """
        result: Dict[str, Any] = {"success": False}

        if name not in {f.name for f in fields(HierarchyConfig)}:
            result["error"] = f"Unknown parameter: {name}"
            return result

        candidate = HierarchyConfig(**{**self.config.to_dict(), name: value})
        try:
            candidate.validate()
        except ValueError as e:
            result["error"] = str(e)
            return result

        self.config = candidate
        result["success"] = True
        logger.info(f"Updated parameter {name} = {value}")
        return result

    # =========================================================================
    # Persistence
    # =========================================================================
    def _export(self) -> Dict[str, Any]:
        return {
            "version": "1.0",
            "updated_at": datetime.now().isoformat(),
            "hierarchy": self.config.to_dict(),
        }

    @staticmethod
    def _config_section(data: Any, path: Path) -> Dict[str, Any]:
        """Accept the exported layout or a flat mapping of fields"""
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data.get("hierarchy", data)

    def save_to_yaml(self, path: Union[str, Path]) -> None:
        """Save current configuration to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self._export(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {path}")

    def load_from_yaml(self, path: Union[str, Path]) -> HierarchyConfig:
        """Load configuration from YAML file"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        self.config = HierarchyConfig.from_dict(self._config_section(data, path))
        logger.info(f"Configuration loaded from {path}")
        return self.config

    def save_to_json(self, path: Union[str, Path]) -> None:
        """Save current configuration to JSON file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self._export(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    def load_from_json(self, path: Union[str, Path]) -> HierarchyConfig:
        """Load configuration from JSON file"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        self.config = HierarchyConfig.from_dict(self._config_section(data, path))
        logger.info(f"Configuration loaded from {path}")
        return self.config


# =============================================================================
# Singleton instance for global access
# =============================================================================
_default_manager: Optional[HierarchyConfigManager] = None


def get_hierarchy_config_manager() -> HierarchyConfigManager:
    """Get the global hierarchy config manager instance"""
    global _default_manager
    if _default_manager is None:
        _default_manager = HierarchyConfigManager()
    return _default_manager


def reset_hierarchy_config_manager() -> None:
    """Reset the global manager (for testing)"""
    global _default_manager
    _default_manager = None


__all__ = [
    "HierarchyConfig",
    "HierarchyConfigManager",
    "get_hierarchy_config_manager",
    "reset_hierarchy_config_manager",
]
