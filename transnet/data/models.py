"""Dataclasses describing the records, graph and analysis results handled by the engine."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

CUSTOM_PREFIX = "custom:"


class EdgeType(str, Enum):
    """Classification of a co-occurrence edge by the groups it connects."""

    TRANSLATION = "translation"
    PUBLICATION = "publication"
    COLLABORATION = "collaboration"
    GEOGRAPHIC = "geographic"
    LINGUISTIC = "linguistic"
    CUSTOM = "custom"


class AttributeKind(Enum):
    """Closed set of record attributes that can act as graph entities."""

    AUTHOR = "author"
    TRANSLATOR = "translator"
    PUBLISHER = "publisher"
    JOURNAL = "journal"
    CITY = "city"
    ORIGINAL_CITY = "original_city"
    SOURCE_LANGUAGE = "source_language"
    TARGET_LANGUAGE = "target_language"
    CUSTOM = "custom"


# Attribute ids used by the bibliography front-end.
_ATTRIBUTE_ALIASES: Dict[str, AttributeKind] = {
    "authorName": AttributeKind.AUTHOR,
    "translatorName": AttributeKind.TRANSLATOR,
    "originalCity": AttributeKind.ORIGINAL_CITY,
    "sourceLanguage": AttributeKind.SOURCE_LANGUAGE,
    "targetLanguage": AttributeKind.TARGET_LANGUAGE,
    "journalName": AttributeKind.JOURNAL,
}


@dataclass(frozen=True, slots=True)
class EntitySpec:
    """Declares which record attribute yields graph entities.

    The attribute key doubles as the node group label and as the prefix of
    every node identity produced from it.
    """

    kind: AttributeKind
    custom_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is AttributeKind.CUSTOM and not self.custom_name:
            raise ValueError("Custom entity specs require a field name")
        if self.kind is not AttributeKind.CUSTOM and self.custom_name is not None:
            raise ValueError(f"Only custom entity specs take a field name, got {self.kind.value}")

    @property
    def attribute_key(self) -> str:
        if self.kind is AttributeKind.CUSTOM:
            return f"{CUSTOM_PREFIX}{self.custom_name}"
        return self.kind.value

    @classmethod
    def parse(cls, key: str) -> "EntitySpec":
        """Build a spec from an attribute key such as ``author`` or ``custom:Genre``."""
        key = key.strip()
        if key.startswith(CUSTOM_PREFIX):
            return cls(AttributeKind.CUSTOM, key[len(CUSTOM_PREFIX):])
        if key in _ATTRIBUTE_ALIASES:
            return cls(_ATTRIBUTE_ALIASES[key])
        try:
            kind = AttributeKind(key)
        except ValueError as exc:
            raise ValueError(f"Unknown entity attribute: {key!r}") from exc
        if kind is AttributeKind.CUSTOM:
            raise ValueError("Custom attributes must be written as 'custom:<name>'")
        return cls(kind)


def default_entity_specs() -> List[EntitySpec]:
    return [
        EntitySpec(AttributeKind.AUTHOR),
        EntitySpec(AttributeKind.TRANSLATOR),
        EntitySpec(AttributeKind.PUBLISHER),
    ]


@dataclass(slots=True)
class TranslationRecord:
    """A bibliographic translation entry. The engine only reads it."""

    record_id: str = ""
    title: str = ""
    author: str = ""
    translator: str = ""
    publisher: str = ""
    city: str = ""
    original_city: str = ""
    source_language: str = ""
    target_language: str = ""
    journal: str = ""
    publication_year: Optional[int] = None
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TranslationRecord":
        """Coerce a loosely typed mapping into a record without raising on bad fields."""
        extra_raw = _first(payload, "extra", "customMetadata", "custom_metadata")
        extra: Dict[str, str] = {}
        if isinstance(extra_raw, Mapping):
            for key, value in extra_raw.items():
                text = _scalar_text(value)
                if text is not None:
                    extra[str(key)] = text
        tags_raw = payload.get("tags")
        tags = [str(tag) for tag in tags_raw] if isinstance(tags_raw, (list, tuple)) else []
        return cls(
            record_id=_text(_first(payload, "record_id", "id")),
            title=_text(payload.get("title")),
            author=_person_name(_first(payload, "author", "authorName", "author_name")),
            translator=_person_name(
                _first(payload, "translator", "translatorName", "translator_name")
            ),
            publisher=_text(payload.get("publisher")),
            city=_text(payload.get("city")),
            original_city=_text(_first(payload, "original_city", "originalCity")),
            source_language=_text(_first(payload, "source_language", "sourceLanguage")),
            target_language=_text(_first(payload, "target_language", "targetLanguage")),
            journal=_text(_first(payload, "journal", "journalName", "journal_name")),
            publication_year=_year(_first(payload, "publication_year", "publicationYear")),
            tags=tags,
            extra=extra,
        )


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _scalar_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return str(value)


def _text(value: Any) -> str:
    return _scalar_text(value) or ""


def _person_name(value: Any) -> str:
    if isinstance(value, Mapping):
        return _text(value.get("name"))
    return _text(value)


def _year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class NetworkConfig:
    """Which attributes become entities and which edges are kept."""

    entity_specs: List[EntitySpec] = field(default_factory=default_entity_specs)
    is_directed: bool = False
    enabled_edge_types: FrozenSet[EdgeType] = field(default_factory=lambda: frozenset(EdgeType))


@dataclass(slots=True)
class AnalysisConfig:
    """Tunables of one analytics pass."""

    pagerank_iterations: int = 20
    damping: float = 0.85
    community_iterations: int = 5
    seed: Optional[int] = None
    betweenness_sample_threshold: int = 2000
    betweenness_sample_fraction: float = 0.25
    betweenness_seed: int = 0
    chunk_size: int = 64
    top_k: int = 10

    def validate(self) -> None:
        if self.pagerank_iterations < 0:
            raise ValueError(f"pagerank_iterations must be >= 0, got {self.pagerank_iterations}")
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must lie in [0, 1], got {self.damping}")
        if self.community_iterations < 0:
            raise ValueError(f"community_iterations must be >= 0, got {self.community_iterations}")
        if not 0.0 < self.betweenness_sample_fraction <= 1.0:
            raise ValueError(
                "betweenness_sample_fraction must lie in (0, 1], "
                f"got {self.betweenness_sample_fraction}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.top_k < 0:
            raise ValueError(f"top_k must be >= 0, got {self.top_k}")


@dataclass(frozen=True, slots=True)
class DegreeResult:
    degree: int = 0
    in_degree: int = 0
    out_degree: int = 0


@dataclass(frozen=True, slots=True)
class CentralityResult:
    closeness: float = 0.0
    betweenness: float = 0.0
    page_rank: float = 0.0


@dataclass(frozen=True, slots=True)
class CommunityResult:
    community: int = 0


PassResult = Union[DegreeResult, CentralityResult, CommunityResult]


@dataclass(frozen=True, slots=True)
class NodeMetrics:
    """Read-only view merging the results of every analysis pass."""

    degree: int = 0
    in_degree: int = 0
    out_degree: int = 0
    closeness: float = 0.0
    betweenness: float = 0.0
    page_rank: float = 0.0
    community: int = 0

    def merge(self, result: PassResult) -> "NodeMetrics":
        return replace(self, **{item.name: getattr(result, item.name) for item in fields(result)})


@dataclass(slots=True)
class Node:
    id: str
    name: str
    group: str
    metrics: NodeMetrics = field(default_factory=NodeMetrics)

    def to_dict(self) -> Dict[str, object]:
        metrics = self.metrics
        return {
            "id": self.id,
            "name": self.name,
            "group": self.group,
            "degree": metrics.degree,
            "inDegree": metrics.in_degree,
            "outDegree": metrics.out_degree,
            "closeness": metrics.closeness,
            "betweenness": metrics.betweenness,
            "pageRank": metrics.page_rank,
            "community": metrics.community,
        }


@dataclass(slots=True)
class Edge:
    source: str
    target: str
    type: EdgeType
    weight: int = 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "type": self.type.value,
        }


@dataclass(slots=True)
class Graph:
    """Nodes and weighted edges derived from one record collection and config."""

    is_directed: bool = False
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: Dict[Tuple[str, str], Edge] = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes)

    def apply(self, results: Mapping[str, PassResult]) -> None:
        """Merge per-node pass results into the node metric views."""
        for node_id, result in results.items():
            node = self.nodes.get(node_id)
            if node is None:
                continue
            node.metrics = node.metrics.merge(result)
