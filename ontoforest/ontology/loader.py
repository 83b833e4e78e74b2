"""
OntoForest Entity Loader
========================
實體載入器，將已取得的 OLS 風格 JSON 資料轉換為 Entity

支援的格式:
- JSON 陣列: [{"iri": ..., "label": ..., "parents": [...]}, ...]
- JSON 物件: {"entities": [...]} 或 {"elements": [...]}
- gzip 壓縮 (.json.gz)

父節點參照可以是字串 IRI，或 {"value": ...} 包裝；
非字串的 value (匿名 restriction 等) 原樣保留為結構性參照。

版本: 1.0.0
"""
from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ontoforest.core.types import Entity, EntityType

logger = logging.getLogger(__name__)


# =============================================================================
# Payload Models
# =============================================================================
class EntityPayload(BaseModel):
    """Single entity as delivered by an ontology lookup service"""

    iri: str = Field(..., min_length=1, description="Entity IRI")
    label: Optional[Union[str, List[str]]] = Field(None, description="Label or list of labels")
    type: Optional[Union[str, List[str]]] = Field(None, description="Entity type(s)")
    parents: List[Any] = Field(default_factory=list, description="Raw parent references")

    model_config = {"extra": "allow"}

    @field_validator("parents", mode="before")
    @classmethod
    def _wrap_single_parent(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            return [value]
        return value

    def first_label(self) -> Optional[str]:
        if isinstance(self.label, list):
            return self.label[0] if self.label else None
        return self.label

    def entity_type(self) -> EntityType:
        types = self.type if isinstance(self.type, list) else [self.type]
        for value in types:
            if isinstance(value, str):
                parsed = EntityType.from_string(value)
                if parsed is not None:
                    return parsed
        return EntityType.CLASS

    def parent_refs(self) -> List[Any]:
        """Unwrap {"value": ...} references"""
        refs = []
        for parent in self.parents:
            if isinstance(parent, dict) and "value" in parent:
                refs.append(parent["value"])
            else:
                refs.append(parent)
        return refs

    def to_entity(self) -> Entity:
        return Entity(
            iri=self.iri,
            parents=tuple(self.parent_refs()),
            label=self.first_label(),
            entity_type=self.entity_type(),
            attributes=dict(self.model_extra or {}),
        )


# =============================================================================
# Entity Loader
# =============================================================================
class EntityLoader:
    """
    實體載入器

    使用方式:
        loader = EntityLoader()
        entities = loader.load(Path("entities.json"))
        hierarchy = extract_entity_hierarchy(entities)
    """

    COLLECTION_KEYS = ("entities", "elements")

    def from_payload(self, items: Iterable[Any]) -> List[Entity]:
        """
        從 JSON 資料建立實體

        Args:
            items: 實體字典列表

        Returns:
            Entity 列表 (保持輸入順序)

        Raises:
            ValueError: 某個項目不是有效的實體資料
        """
        entities = []
        for index, item in enumerate(items):
            try:
                payload = EntityPayload.model_validate(item)
            except ValidationError as e:
                raise ValueError(f"Invalid entity payload at index {index}: {e}")
            entities.append(payload.to_entity())

        logger.debug(f"Materialized {len(entities)} entities from payload")
        return entities

    def load(self, path: Union[str, Path]) -> List[Entity]:
        """
        載入 JSON 實體檔案

        Args:
            path: .json 或 .json.gz 檔案路徑
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Entity file not found: {path}")

        logger.info(f"Loading entities from {path}")

        if str(path).endswith(".gz"):
            with gzip.open(path, "rt", encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        entities = self.from_payload(self._extract_items(data))
        logger.info(f"Loaded {len(entities)} entities from {path.name}")
        return entities

    def _extract_items(self, data: Any) -> List[Any]:
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in self.COLLECTION_KEYS:
                if isinstance(data.get(key), list):
                    return data[key]
        raise ValueError(
            f"Expected a JSON list or an object with one of {list(self.COLLECTION_KEYS)}"
        )


# =============================================================================
# Factory Functions
# =============================================================================
def create_entity_loader() -> EntityLoader:
    """工廠函數: 創建實體載入器"""
    return EntityLoader()


def entities_from_payload(items: Iterable[Dict[str, Any]]) -> List[Entity]:
    """從 JSON 資料建立實體"""
    return EntityLoader().from_payload(items)


def load_entities(path: Union[str, Path]) -> List[Entity]:
    """載入 JSON 實體檔案"""
    return EntityLoader().load(path)
