"""
OntoForest Protocol Definitions
===============================
所有模組的接口契約 (Protocol)

設計原則:
1. 抽取器只依賴 EntityProtocol，不依賴具體的 Entity 類別
2. 使用 typing.Protocol 實現結構性子類型 (structural subtyping)

版本: 1.0.0
"""
from __future__ import annotations

from typing import (
    Any,
    Iterable,
    List,
    Protocol,
    Sequence,
    runtime_checkable,
)

from ontoforest.core.types import EntityHierarchy


# =============================================================================
# Entity Protocol
# =============================================================================
@runtime_checkable
class EntityProtocol(Protocol):
    """
    實體協議

    任何提供 iri 與 parents 的物件都可以作為抽取器輸入

    實現: ontoforest.core.types.Entity
    """

    @property
    def iri(self) -> str:
        """穩定唯一的字串識別碼"""
        ...

    @property
    def parents(self) -> Sequence[Any]:
        """原始父節點參照 (str 或結構性參照)"""
        ...


# =============================================================================
# Hierarchy Protocols
# =============================================================================
@runtime_checkable
class HierarchyExtractorProtocol(Protocol):
    """
    層次結構抽取協議

    實現模組: ontoforest/ontology/hierarchy.py
    """

    def extract(self, entities: Iterable[EntityProtocol]) -> EntityHierarchy:
        """將扁平實體集合轉換為無環森林"""
        ...

    def is_universal_root(self, iri: str) -> bool:
        """是否為 universal root (owl:Thing 等)"""
        ...


@runtime_checkable
class EntityLoaderProtocol(Protocol):
    """
    實體載入協議

    實現模組: ontoforest/ontology/loader.py
    """

    def from_payload(self, items: Iterable[Any]) -> List[EntityProtocol]:
        """從已取得的 JSON 資料建立實體"""
        ...
