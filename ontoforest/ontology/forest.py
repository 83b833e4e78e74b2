"""
# ==============================================================================
# Module: ontoforest/ontology/forest.py
# ==============================================================================
# Purpose: Read-only views over an extracted EntityHierarchy for tree and
#          graph displays
#
# Dependencies:
#   - External: networkx
#   - Internal: ontoforest.core.types (EntityHierarchy, EntityType)
#
# Input:
#   - EntityHierarchy returned by HierarchyExtractor.extract()
#
# Output:
#   - Depth-first traversal, descendants
#   - Nested tree dicts (tree view), edge lists, NetworkX DiGraph (graph view)
#   - Statistics and invariant checks
# ==============================================================================
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

import networkx as nx

from ontoforest.core.types import DEFAULT_UNIVERSAL_ROOTS, EntityHierarchy, EntityType

logger = logging.getLogger(__name__)


# ==============================================================================
# Traversal
# ==============================================================================
def iter_depth_first(
    hierarchy: EntityHierarchy,
) -> Iterator[Tuple[Any, int, Optional[str]]]:
    """
    Pre-order walk from every root.

    Yields:
        (entity, depth, parent_iri); roots have depth 0 and parent_iri None.
        An entity with several parents is yielded once per parent edge, but
        its children are only walked the first time it is reached.
    """
    expanded: Set[str] = set()
    for root in hierarchy.root_entities:
        stack: List[Tuple[Any, int, Optional[str]]] = [(root, 0, None)]
        while stack:
            entity, depth, parent_iri = stack.pop()
            yield entity, depth, parent_iri
            if entity.iri in expanded:
                continue
            expanded.add(entity.iri)
            children = hierarchy.children_of.get(entity.iri, [])
            for child in reversed(children):
                stack.append((child, depth + 1, entity.iri))


def get_descendants(hierarchy: EntityHierarchy, iri: str) -> Set[str]:
    """All IRIs below iri (excluding iri itself)"""
    descendants: Set[str] = set()
    stack = [iri]

    while stack:
        current = stack.pop()
        for child in hierarchy.children_of.get(current, []):
            if child.iri not in descendants:
                descendants.add(child.iri)
                stack.append(child.iri)

    descendants.discard(iri)
    return descendants


# ==============================================================================
# Export
# ==============================================================================
def _entity_type_value(entity: Any) -> Optional[str]:
    entity_type = getattr(entity, "entity_type", None)
    if isinstance(entity_type, EntityType):
        return entity_type.value
    return entity_type


def _entity_label(entity: Any) -> str:
    label = getattr(entity, "display_label", None)
    return label if label is not None else entity.iri


def to_tree(hierarchy: EntityHierarchy, sort_by_label: bool = False) -> List[Dict[str, Any]]:
    """
    Nested tree for a tree view.

    Each node is {"iri", "label", "type", "repeated", "children": [...]}. A
    shared child (several parents) appears under every parent, but only its
    first occurrence carries children; later ones have "repeated" set.
    """

    def ordered(entities: Iterable[Any]) -> List[Any]:
        entities = list(entities)
        if sort_by_label:
            entities.sort(key=lambda e: _entity_label(e).lower())
        return entities

    expanded: Set[str] = set()

    def make_node(entity: Any) -> Dict[str, Any]:
        return {
            "iri": entity.iri,
            "label": _entity_label(entity),
            "type": _entity_type_value(entity),
            "repeated": entity.iri in expanded,
            "children": [],
        }

    forest: List[Dict[str, Any]] = []
    # (entity, list the built node is appended to)
    stack: List[Tuple[Any, List[Dict[str, Any]]]] = [
        (root, forest) for root in reversed(ordered(hierarchy.root_entities))
    ]

    while stack:
        entity, siblings = stack.pop()
        node = make_node(entity)
        siblings.append(node)
        if node["repeated"]:
            continue
        expanded.add(entity.iri)
        for child in reversed(ordered(hierarchy.children_of.get(entity.iri, []))):
            stack.append((child, node["children"]))

    return forest


def to_edges(hierarchy: EntityHierarchy) -> List[Tuple[str, str]]:
    """導出為 (parent_iri, child_iri) 邊列表"""
    return [
        (parent_iri, child.iri)
        for parent_iri, children in hierarchy.children_of.items()
        for child in children
    ]


def to_networkx(hierarchy: EntityHierarchy) -> nx.DiGraph:
    """
    Convert to a NetworkX DiGraph (parent -> child edges) for graph views.

    Node attributes: label, entity_type, is_root
    """
    graph = nx.DiGraph()
    root_iris = set(hierarchy.root_iris)

    def add_node(entity: Any) -> None:
        if entity.iri in graph:
            return
        graph.add_node(
            entity.iri,
            label=_entity_label(entity),
            entity_type=_entity_type_value(entity),
            is_root=entity.iri in root_iris,
        )

    for root in hierarchy.root_entities:
        add_node(root)

    for parent_iri, children in hierarchy.children_of.items():
        for child in children:
            add_node(child)
            graph.add_edge(parent_iri, child.iri)

    logger.debug(
        f"Built NetworkX graph: {graph.number_of_nodes()} nodes, "
        f"{graph.number_of_edges()} edges"
    )
    return graph


# ==============================================================================
# Statistics / Validation
# ==============================================================================
def compute_statistics(hierarchy: EntityHierarchy) -> Dict[str, Any]:
    """Summary counts for an extracted hierarchy"""
    max_depth = nx.dag_longest_path_length(to_networkx(hierarchy))

    return {
        "num_roots": len(hierarchy.root_entities),
        "num_entities": hierarchy.num_entities,
        "num_edges": hierarchy.num_edges,
        "num_parents": len(hierarchy.children_of),
        "max_depth": max_depth,
        "num_removed_edges": len(hierarchy.removed_edges),
    }


def validate_hierarchy(
    hierarchy: EntityHierarchy,
    universal_roots: Iterable[str] = DEFAULT_UNIVERSAL_ROOTS,
) -> List[str]:
    """
    Check the forest invariants.

    Returns:
        Violation messages; empty when the hierarchy is valid
    """
    violations: List[str] = []
    sentinels = set(universal_roots)

    for root in hierarchy.root_entities:
        if root.iri in sentinels:
            violations.append(f"Universal root {root.iri} listed as a root")

    for parent_iri, children in hierarchy.children_of.items():
        if parent_iri in sentinels:
            violations.append(f"Universal root {parent_iri} has children")
        seen: Set[str] = set()
        for child in children:
            if child.iri in sentinels:
                violations.append(f"Universal root {child.iri} listed as child of {parent_iri}")
            if child.iri in seen:
                violations.append(f"{child.iri} listed twice under {parent_iri}")
            seen.add(child.iri)

    root_iris = set(hierarchy.root_iris)
    child_iris = {child.iri for children in hierarchy.children_of.values() for child in children}
    for iri in root_iris & child_iris:
        violations.append(f"{iri} is both a root and a child")

    graph = to_networkx(hierarchy)
    if not nx.is_directed_acyclic_graph(graph):
        cycle = nx.find_cycle(graph)
        violations.append(f"Cycle remains: {[edge[0] for edge in cycle]}")
    else:
        reachable: Set[str] = set(root_iris)
        for root_iri in root_iris:
            reachable |= nx.descendants(graph, root_iri)
        for iri in sorted(set(graph.nodes) - reachable):
            violations.append(f"{iri} is not reachable from any root")

    return violations
