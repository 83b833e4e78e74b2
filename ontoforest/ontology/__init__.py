"""
OntoForest Ontology Module
==========================
本體實體層次結構處理模組

主要功能:
- 將扁平實體集合轉換為森林 (根節點 + 子節點映射)
- 打破父節點循環 (自我參照、多實體循環)
- 排除 universal root (owl:Thing, owl:TopObjectProperty)
- 樹狀/圖形檢視的輔助輸出 (nested tree, edge list, NetworkX)
- 從 OLS 風格 JSON 載入實體

使用範例:
    from ontoforest.ontology import load_entities, extract_entity_hierarchy, to_tree

    entities = load_entities("entities.json")
    hierarchy = extract_entity_hierarchy(entities)

    for root in hierarchy.root_entities:
        print(root.display_label, len(hierarchy.get_children(root.iri)))

    tree = to_tree(hierarchy, sort_by_label=True)

版本: 1.0.0
"""

# Hierarchy extraction
from ontoforest.ontology.hierarchy import (
    HierarchyExtractor,
    create_hierarchy_extractor,
    extract_entity_hierarchy,
)

# Forest views
from ontoforest.ontology.forest import (
    compute_statistics,
    get_descendants,
    iter_depth_first,
    to_edges,
    to_networkx,
    to_tree,
    validate_hierarchy,
)

# Loader
from ontoforest.ontology.loader import (
    EntityPayload,
    EntityLoader,
    create_entity_loader,
    entities_from_payload,
    load_entities,
)

__all__ = [
    # Extractor
    "HierarchyExtractor",
    "create_hierarchy_extractor",
    "extract_entity_hierarchy",
    # Forest views
    "compute_statistics",
    "get_descendants",
    "iter_depth_first",
    "to_edges",
    "to_networkx",
    "to_tree",
    "validate_hierarchy",
    # Loader
    "EntityPayload",
    "EntityLoader",
    "create_entity_loader",
    "entities_from_payload",
    "load_entities",
]
