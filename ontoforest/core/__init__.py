"""
OntoForest Core Module
======================
核心模組，包含所有 Protocol 定義和共享類型

使用方式:
    from ontoforest.core import Entity, EntityHierarchy, EntityType
    from ontoforest.core import OWL_THING, DEFAULT_UNIVERSAL_ROOTS
"""

# Core Types
from ontoforest.core.types import (
    # Constants
    OWL_THING,
    OWL_TOP_OBJECT_PROPERTY,
    DEFAULT_UNIVERSAL_ROOTS,
    # Enums
    EntityType,
    # Data Classes
    Entity,
    EntityHierarchy,
)

# Protocols
from ontoforest.core.protocols import (
    EntityProtocol,
    HierarchyExtractorProtocol,
    EntityLoaderProtocol,
)

__all__ = [
    # === Constants ===
    "OWL_THING",
    "OWL_TOP_OBJECT_PROPERTY",
    "DEFAULT_UNIVERSAL_ROOTS",
    # === Enums ===
    "EntityType",
    # === Data Classes ===
    "Entity",
    "EntityHierarchy",
    # === Protocols ===
    "EntityProtocol",
    "HierarchyExtractorProtocol",
    "EntityLoaderProtocol",
]
