"""
OntoForest Ontology Hierarchy Extraction
========================================
將扁平的本體實體集合轉換為森林 (根節點 + 子節點映射)

處理步驟:
1. 建立索引: IRI -> 實體, 父節點索引, 子節點索引
2. 打破循環: 從每個實體向上走訪祖先，移除回到目前路徑的邊
3. 抽取根節點: 移除循環後沒有父節點的實體

universal root (owl:Thing, owl:TopObjectProperty) 不會出現在結果中；
指向 universal root 的邊視為「沒有父節點」。

版本: 1.0.0
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ontoforest.config import HierarchyConfig, get_hierarchy_config_manager
from ontoforest.core.protocols import EntityProtocol
from ontoforest.core.types import EntityHierarchy

logger = logging.getLogger(__name__)

# iri -> ordered set of parent iris
ParentIndex = Dict[str, Dict[str, None]]
# iri -> ordered mapping of child iri -> child entity
ChildIndex = Dict[str, Dict[str, EntityProtocol]]


# =============================================================================
# Hierarchy Extractor
# =============================================================================
class HierarchyExtractor:
    """
    層次結構抽取器

    每次呼叫 extract() 都會重新建立所有索引，不保留任何狀態，
    可以在多個執行緒中同時使用同一個實例。

    使用方式:
        extractor = HierarchyExtractor()
        hierarchy = extractor.extract(entities)
        for root in hierarchy.root_entities:
            children = hierarchy.get_children(root.iri)
    """

    def __init__(self, config: Optional[HierarchyConfig] = None):
        """
        Args:
            config: 抽取設定，預設使用全域設定
        """
        self.config = config or get_hierarchy_config_manager().config
        self.config.validate()
        self._universal_roots = self.config.universal_root_set

    def is_universal_root(self, iri: str) -> bool:
        """是否為 universal root"""
        return iri in self._universal_roots

    # =========================================================================
    # Extraction
    # =========================================================================
    def extract(self, entities: Iterable[EntityProtocol]) -> EntityHierarchy:
        """
        將實體集合轉換為無環森林

        Args:
            entities: 實體集合 (可包含懸空參照、自我參照與循環)

        Returns:
            EntityHierarchy (root_entities 依輸入順序)

        Raises:
            RuntimeError: 內部索引不一致 (程式錯誤，而非輸入錯誤)
        """
        entities = list(entities)

        iri_to_entity = self._index_entities(entities)
        parents_of, children_of = self._build_edges(entities, iri_to_entity)
        removed_edges = self._break_cycles(entities, parents_of, children_of, iri_to_entity)

        root_entities = [
            entity for entity in entities
            if not self.is_universal_root(entity.iri) and not parents_of.get(entity.iri)
        ]

        hierarchy = EntityHierarchy(
            root_entities=root_entities,
            children_of={
                parent_iri: list(children.values())
                for parent_iri, children in children_of.items()
                if children
            },
            removed_edges=removed_edges,
        )

        logger.info(
            f"Extracted hierarchy from {len(entities)} entities: "
            f"{len(root_entities)} roots, {hierarchy.num_edges} edges, "
            f"{len(removed_edges)} removed to break cycles"
        )
        return hierarchy

    # =========================================================================
    # Step 1: Index build
    # =========================================================================
    def _index_entities(self, entities: List[EntityProtocol]) -> Dict[str, EntityProtocol]:
        """建立 IRI -> 實體索引 (重複 IRI 以最後一個為準)"""
        iri_to_entity: Dict[str, EntityProtocol] = {}
        duplicates: Set[str] = set()

        for entity in entities:
            if entity.iri in iri_to_entity:
                duplicates.add(entity.iri)
            iri_to_entity[entity.iri] = entity

        if duplicates and self.config.warn_on_duplicate_iris:
            logger.warning(
                f"{len(duplicates)} IRIs occur more than once, using the last occurrence: "
                f"{sorted(duplicates)[:5]}"
            )

        return iri_to_entity

    def _build_edges(
        self,
        entities: List[EntityProtocol],
        iri_to_entity: Dict[str, EntityProtocol],
    ) -> Tuple[ParentIndex, ChildIndex]:
        """建立父節點與子節點索引"""
        parents_of: ParentIndex = {}
        children_of: ChildIndex = {}

        for entity in entities:
            if self.is_universal_root(entity.iri):
                continue

            for parent in self._resolve_parents(entity, iri_to_entity):
                if self.is_universal_root(parent.iri):
                    continue

                children_of.setdefault(parent.iri, {})[entity.iri] = entity
                parents_of.setdefault(entity.iri, {})[parent.iri] = None

        return parents_of, children_of

    def _resolve_parents(
        self,
        entity: EntityProtocol,
        iri_to_entity: Dict[str, EntityProtocol],
    ) -> Iterator[EntityProtocol]:
        for ref in entity.parents:
            # bnode parents (restrictions etc.) are not part of the hierarchy
            if not isinstance(ref, str):
                continue

            parent = iri_to_entity.get(ref)
            if parent is None:
                logger.debug(f"Dropping dangling parent {ref} of {entity.iri}")
                continue

            yield parent

    # =========================================================================
    # Step 2: Cycle breaking
    # =========================================================================
    def _break_cycles(
        self,
        entities: List[EntityProtocol],
        parents_of: ParentIndex,
        children_of: ChildIndex,
        iri_to_entity: Dict[str, EntityProtocol],
    ) -> List[Tuple[str, str]]:
        """
        從每個實體 (依輸入順序) 深度優先向上走訪父節點。
        若父節點已在目前路徑上，移除 child -> parent 這條邊。

        已完整走訪的節點 (settled) 其祖先必定無環，
        之後的走訪不會在其中移除任何邊，因此不再進入。

        Returns:
            移除的 (child_iri, parent_iri) 邊，依移除順序
        """
        removed: List[Tuple[str, str]] = []
        settled: Set[str] = set()

        for seed in entities:
            if self.is_universal_root(seed.iri) or seed.iri in settled:
                continue

            on_path: Set[str] = {seed.iri}
            stack: List[Tuple[str, Iterator[str]]] = [
                (seed.iri, self._snapshot_parents(seed.iri, parents_of))
            ]

            while stack:
                current_iri, pending = stack[-1]
                parent_iri = next(pending, None)

                if parent_iri is None:
                    stack.pop()
                    on_path.discard(current_iri)
                    settled.add(current_iri)
                    continue

                if parent_iri in on_path:
                    self._remove_edge(current_iri, parent_iri, parents_of, children_of)
                    removed.append((current_iri, parent_iri))
                elif parent_iri not in settled:
                    self._require_entity(parent_iri, iri_to_entity)
                    on_path.add(parent_iri)
                    stack.append((parent_iri, self._snapshot_parents(parent_iri, parents_of)))

        if removed:
            logger.info(f"Removed {len(removed)} edges to break cycles")

        return removed

    @staticmethod
    def _snapshot_parents(iri: str, parents_of: ParentIndex) -> Iterator[str]:
        return iter(list(parents_of.get(iri, ())))

    def _remove_edge(
        self,
        child_iri: str,
        parent_iri: str,
        parents_of: ParentIndex,
        children_of: ChildIndex,
    ) -> None:
        """移除 child -> parent 及其鏡像邊"""
        try:
            del parents_of[child_iri][parent_iri]
            del children_of[parent_iri][child_iri]
        except KeyError:
            raise RuntimeError(
                f"Parent and child indexes out of sync for edge {child_iri} -> {parent_iri}"
            )

        if self.config.log_removed_edges:
            logger.debug(f"Cycle detected: removed edge {child_iri} -> {parent_iri}")

    @staticmethod
    def _require_entity(iri: str, iri_to_entity: Dict[str, EntityProtocol]) -> EntityProtocol:
        """索引中必定存在的實體；不存在表示索引建立有誤"""
        entity = iri_to_entity.get(iri)
        if entity is None:
            raise RuntimeError(f"Indexed entity {iri} is missing from the IRI index")
        return entity


# =============================================================================
# Factory Functions
# =============================================================================
def create_hierarchy_extractor(config: Optional[HierarchyConfig] = None) -> HierarchyExtractor:
    """
    工廠函數: 創建層次結構抽取器

    Args:
        config: 抽取設定

    Returns:
        HierarchyExtractor 實例
    """
    return HierarchyExtractor(config)


def extract_entity_hierarchy(
    entities: Iterable[Any],
    config: Optional[HierarchyConfig] = None,
) -> EntityHierarchy:
    """將實體集合轉換為 EntityHierarchy (根節點 + 子節點映射)"""
    return HierarchyExtractor(config).extract(entities)
