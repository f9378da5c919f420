"""Derive a weighted co-occurrence graph from translation records."""
from __future__ import annotations

from itertools import combinations, product
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from ..data.models import (
    CUSTOM_PREFIX,
    AttributeKind,
    Edge,
    EdgeType,
    Graph,
    NetworkConfig,
    Node,
    TranslationRecord,
)
from ..utils.logging import get_logger
from .entities import EntityResolver, ResolvedEntity

LOGGER = get_logger(__name__)

_ROLE_BY_GROUP: Dict[str, str] = {
    AttributeKind.AUTHOR.value: "author",
    AttributeKind.TRANSLATOR.value: "translator",
    AttributeKind.PUBLISHER.value: "venue",
    AttributeKind.JOURNAL.value: "venue",
    AttributeKind.CITY.value: "place",
    AttributeKind.ORIGINAL_CITY.value: "place",
    AttributeKind.SOURCE_LANGUAGE.value: "language",
    AttributeKind.TARGET_LANGUAGE.value: "language",
}
_ROLES = ("author", "translator", "venue", "place", "language", "other")


def _classify_roles(left: str, right: str) -> EdgeType:
    pair = {left, right}
    if pair == {"author", "translator"}:
        return EdgeType.TRANSLATION
    if "venue" in pair:
        return EdgeType.PUBLICATION
    if pair == {"translator"}:
        return EdgeType.COLLABORATION
    if "place" in pair:
        return EdgeType.GEOGRAPHIC
    if "language" in pair:
        return EdgeType.LINGUISTIC
    return EdgeType.CUSTOM


_EDGE_TYPE_TABLE: Dict[FrozenSet[str], EdgeType] = {
    frozenset((left, right)): _classify_roles(left, right)
    for left, right in product(_ROLES, repeat=2)
}


def group_role(group: str) -> str:
    if group.startswith(CUSTOM_PREFIX):
        return "other"
    return _ROLE_BY_GROUP.get(group, "other")


def classify_edge(source_group: str, target_group: str) -> EdgeType:
    """Return the edge type for a pair of entity groups (order-insensitive)."""
    return _EDGE_TYPE_TABLE[frozenset((group_role(source_group), group_role(target_group)))]


class GraphBuilder:
    """Build a `Graph` from records according to a `NetworkConfig`."""

    def __init__(self, config: NetworkConfig):
        if config is None:
            raise ValueError("config must not be None")
        self.config = config
        self._resolver = EntityResolver(config.entity_specs)

    def build(self, records: Iterable[Any]) -> Graph:
        if records is None:
            raise ValueError("records must not be None")

        graph = Graph(is_directed=self.config.is_directed)
        processed = 0
        skipped = 0
        for raw in records:
            record = _coerce_record(raw)
            if record is None:
                skipped += 1
                continue
            processed += 1
            entities = self._resolver.resolve(record)
            self._add_nodes(graph, entities)
            self._add_edges(graph, entities)

        if skipped:
            LOGGER.warning("Skipped %s records that could not be interpreted", skipped)
        LOGGER.info(
            "Graph built from %s records: %s nodes, %s edges (directed=%s)",
            processed,
            graph.node_count,
            graph.edge_count,
            graph.is_directed,
        )
        return graph

    @staticmethod
    def _add_nodes(graph: Graph, entities: Iterable[ResolvedEntity]) -> None:
        for entity in entities:
            if entity.identity not in graph.nodes:
                graph.nodes[entity.identity] = Node(
                    id=entity.identity, name=entity.name, group=entity.group
                )

    def _add_edges(self, graph: Graph, entities: list[ResolvedEntity]) -> None:
        enabled = self.config.enabled_edge_types
        for left, right in combinations(entities, 2):
            if left.identity == right.identity:
                continue
            edge_type = classify_edge(left.group, right.group)
            if edge_type not in enabled:
                continue
            key = self._edge_key(left.identity, right.identity)
            edge = graph.edges.get(key)
            if edge is None:
                graph.edges[key] = Edge(source=key[0], target=key[1], type=edge_type)
            else:
                edge.weight += 1

    def _edge_key(self, source: str, target: str) -> Tuple[str, str]:
        if self.config.is_directed:
            return source, target
        return (source, target) if source <= target else (target, source)


def build_graph(records: Iterable[Any], config: NetworkConfig) -> Graph:
    """Build a fresh graph; the result is a pure function of (records, config)."""
    return GraphBuilder(config).build(records)


def _coerce_record(raw: Any) -> Optional[TranslationRecord]:
    if isinstance(raw, TranslationRecord):
        return raw
    if isinstance(raw, Mapping):
        return TranslationRecord.from_mapping(raw)
    LOGGER.debug("Ignoring record of unsupported type %s", type(raw).__name__)
    return None
