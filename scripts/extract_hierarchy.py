#!/usr/bin/env python3
"""
OntoForest Hierarchy Extraction Script
======================================
Command-line driver for turning an entity dump into a forest.

Script: scripts/extract_hierarchy.py

Purpose:
    Load a JSON entity dump (already fetched from an ontology lookup
    service), extract the acyclic hierarchy and print it.

Usage:
    python scripts/extract_hierarchy.py entities.json
    python scripts/extract_hierarchy.py entities.json --format json --sort-by-label
    python scripts/extract_hierarchy.py entities.json.gz --format stats
    python scripts/extract_hierarchy.py entities.json --config configs/hierarchy.yaml

Dependencies:
    - argparse: CLI argument parsing
    - ontoforest.config: HierarchyConfigManager (YAML config)
    - ontoforest.ontology: EntityLoader, HierarchyExtractor, forest views

Input:
    - JSON list of entities, or an object with "entities"/"elements"

Output:
    - Indented tree, nested JSON tree, or statistics on stdout

Version: 1.0.0
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ontoforest.config import HierarchyConfigManager
from ontoforest.ontology import (
    HierarchyExtractor,
    compute_statistics,
    iter_depth_first,
    load_entities,
    to_tree,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        description="Extract an acyclic entity hierarchy from a JSON entity dump",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to JSON (or .json.gz) entity file",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to YAML hierarchy configuration file",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["tree", "json", "stats"],
        default="tree",
        help="Output format",
    )
    parser.add_argument(
        "--sort-by-label",
        action="store_true",
        help="Sort roots and children by label",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging (lists every edge removed to break cycles)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    manager = HierarchyConfigManager()
    if args.config:
        manager.load_from_yaml(args.config)

    entities = load_entities(Path(args.input))
    hierarchy = HierarchyExtractor(manager.config).extract(entities)

    if args.format == "stats":
        print(json.dumps(compute_statistics(hierarchy), indent=2))
    elif args.format == "json":
        print(json.dumps(to_tree(hierarchy, sort_by_label=args.sort_by_label), indent=2))
    else:
        if args.sort_by_label:
            for node in to_tree(hierarchy, sort_by_label=True):
                _print_tree_node(node, 0)
        else:
            for entity, depth, _ in iter_depth_first(hierarchy):
                label = getattr(entity, "display_label", entity.iri)
                print(f"{'  ' * depth}{label} <{entity.iri}>")

    return 0


def _print_tree_node(node: dict, depth: int) -> None:
    stack = [(node, depth)]
    while stack:
        current, level = stack.pop()
        print(f"{'  ' * level}{current['label']} <{current['iri']}>")
        for child in reversed(current["children"]):
            stack.append((child, level + 1))


if __name__ == "__main__":
    sys.exit(main())
