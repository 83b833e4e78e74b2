"""
OntoForest Core Types
=====================
統一的資料類型定義，所有模組共享

- Entity: 本體實體 (class / property / individual)
- EntityHierarchy: 層次結構抽取結果 (根節點 + 子節點映射)
- Well-known universal root IRIs

版本: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    FrozenSet,
    List,
    Optional,
    Tuple,
)


# =============================================================================
# Well-known IRIs
# =============================================================================
OWL_THING = "http://www.w3.org/2002/07/owl#Thing"
OWL_TOP_OBJECT_PROPERTY = "http://www.w3.org/2002/07/owl#TopObjectProperty"

# Top-of-everything class and property. Excluded from every extracted forest.
DEFAULT_UNIVERSAL_ROOTS: FrozenSet[str] = frozenset({OWL_THING, OWL_TOP_OBJECT_PROPERTY})


# =============================================================================
# Enums
# =============================================================================
class EntityType(str, Enum):
    """
    本體實體類型

    使用 str 繼承以支援 JSON 序列化
    """
    CLASS = "class"
    PROPERTY = "property"
    INDIVIDUAL = "individual"

    @classmethod
    def from_string(cls, value: str) -> Optional["EntityType"]:
        """解析實體類型 (接受複數形式，例如 "classes")"""
        aliases = {
            "class": cls.CLASS,
            "classes": cls.CLASS,
            "property": cls.PROPERTY,
            "properties": cls.PROPERTY,
            "individual": cls.INDIVIDUAL,
            "individuals": cls.INDIVIDUAL,
        }
        return aliases.get(value.strip().lower())


# =============================================================================
# Core Data Classes
# =============================================================================
@dataclass(frozen=True)
class Entity:
    """
    本體實體

    parents 保存原始父節點參照:
    - str: 另一個實體的 IRI
    - 其他值: 匿名/結構性參照 (例如 restriction)，不參與層次結構

    parents 與 attributes 可能含 dict，不參與 hash
    """
    iri: str
    parents: Tuple[Any, ...] = field(default=(), hash=False)

    # Optional metadata
    label: Optional[str] = None
    entity_type: EntityType = EntityType.CLASS

    # Extra attributes (flexible)
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def display_label(self) -> str:
        """Label, falling back to the last path segment of the IRI"""
        if self.label:
            return self.label
        return self.iri.split("/")[-1]

    def parent_iris(self) -> List[str]:
        """String-valued parent references only"""
        return [p for p in self.parents if isinstance(p, str)]


@dataclass
class EntityHierarchy:
    """
    層次結構抽取結果

    root_entities: 沒有父節點的實體 (依輸入順序)
    children_of: IRI -> 直接子實體列表
    removed_edges: 為打破循環而移除的 (child_iri, parent_iri) 邊
    """
    root_entities: List[Any] = field(default_factory=list)
    children_of: Dict[str, List[Any]] = field(default_factory=dict)
    removed_edges: List[Tuple[str, str]] = field(default_factory=list)

    def get_children(self, iri: str) -> List[Any]:
        """獲取直接子節點"""
        return list(self.children_of.get(iri, []))

    def has_children(self, iri: str) -> bool:
        return bool(self.children_of.get(iri))

    def is_root(self, iri: str) -> bool:
        return any(entity.iri == iri for entity in self.root_entities)

    @property
    def root_iris(self) -> List[str]:
        return [entity.iri for entity in self.root_entities]

    @property
    def num_edges(self) -> int:
        return sum(len(children) for children in self.children_of.values())

    @property
    def num_entities(self) -> int:
        """Distinct IRIs that appear as a root or as a child"""
        iris = {entity.iri for entity in self.root_entities}
        for children in self.children_of.values():
            iris.update(child.iri for child in children)
        return len(iris)

    def __repr__(self) -> str:
        return (
            f"EntityHierarchy(roots={len(self.root_entities)}, "
            f"edges={self.num_edges}, removed_edges={len(self.removed_edges)})"
        )
