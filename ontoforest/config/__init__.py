"""
OntoForest Configuration Module
===============================
Centralized configuration management for hierarchy extraction.

Components (re-exported):
    From settings:
        - HierarchyConfig: Extraction settings (universal roots, diagnostics)
        - HierarchyConfigManager: Update and YAML/JSON persistence
        - get_hierarchy_config_manager: Get global manager instance
        - reset_hierarchy_config_manager: Drop the global manager

Dependencies:
    - yaml: Configuration files

Usage:
    from ontoforest.config import get_hierarchy_config_manager
    manager = get_hierarchy_config_manager()
    manager.load_from_yaml("configs/hierarchy.yaml")

Version: 1.0.0
"""

from ontoforest.config.settings import (
    HierarchyConfig,
    HierarchyConfigManager,
    get_hierarchy_config_manager,
    reset_hierarchy_config_manager,
)


__all__ = [
    "HierarchyConfig",
    "HierarchyConfigManager",
    "get_hierarchy_config_manager",
    "reset_hierarchy_config_manager",
]
