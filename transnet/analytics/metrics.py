"""Read-only query surface over an analysed graph, producing dashboard-ready aggregates."""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from statistics import median
from typing import Dict, List

import networkx as nx

from ..data.models import AttributeKind, Graph, Node
from .centrality import structural_graph

_METRIC_FIELDS: Dict[str, str] = {
    "degree": "degree",
    "inDegree": "in_degree",
    "outDegree": "out_degree",
    "closeness": "closeness",
    "betweenness": "betweenness",
    "pageRank": "page_rank",
    "community": "community",
}
_METRIC_FIELDS.update({value: value for value in list(_METRIC_FIELDS.values())})


class MetricsFacade:
    """Expose the nodes, edges and aggregates of an already analysed graph.

    Nothing here recomputes centrality or communities; it only reads what the
    analyzers merged into each node.
    """

    def __init__(self, graph: Graph):
        if graph is None:
            raise ValueError("graph must not be None")
        self.graph = graph

    def nodes(self) -> List[Dict[str, object]]:
        return [node.to_dict() for node in self.graph.nodes.values()]

    def edges(self) -> List[Dict[str, object]]:
        return [edge.to_dict() for edge in self.graph.edges.values()]

    def density(self) -> float:
        n = self.graph.node_count
        if n <= 1:
            return 0.0
        return self.graph.edge_count / (n * (n - 1))

    def average_degree(self) -> float:
        n = self.graph.node_count
        if n == 0:
            return 0.0
        return self.graph.edge_count / n

    def community_count(self) -> int:
        return len({node.metrics.community for node in self.graph.nodes.values()})

    def top(self, metric: str, k: int = 10, group: str | None = None) -> List[Dict[str, object]]:
        """Top ``k`` nodes by ``metric`` (descending), ties broken by node id ascending."""
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        attribute = _METRIC_FIELDS.get(metric)
        if attribute is None:
            raise ValueError(f"Unknown metric: {metric!r}")
        candidates: List[Node] = [
            node for node in self.graph.nodes.values() if group is None or node.group == group
        ]
        ranked = sorted(candidates, key=lambda node: (-getattr(node.metrics, attribute), node.id))
        return [node.to_dict() for node in ranked[:k]]

    def summary(self, top_k: int = 10) -> Dict[str, object]:
        """Compute the aggregate network report.

        The returned dictionary is JSON-serialisable.
        """
        graph = self.graph
        view = structural_graph(graph)
        components = list(nx.connected_components(view))
        degree_values = [node.metrics.degree for node in graph.nodes.values()]

        return {
            "metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "is_directed": graph.is_directed,
            },
            "node_count": graph.node_count,
            "edge_count": graph.edge_count,
            "density": self.density(),
            "average_degree": self.average_degree(),
            "median_degree": median(degree_values) if degree_values else 0.0,
            "max_degree": max(degree_values, default=0),
            "community_count": self.community_count(),
            "clustering_coefficient": _average_clustering(view),
            "diameter_estimate": _diameter(view),
            "connected_components": len(components),
            "largest_component_size": max((len(component) for component in components), default=0),
            "isolated_nodes": nx.number_of_isolates(view),
            "group_counts": dict(Counter(node.group for node in graph.nodes.values())),
            "edge_type_counts": dict(Counter(edge.type.value for edge in graph.edges.values())),
            "top_page_rank": self.top("pageRank", top_k),
            "top_betweenness": self.top("betweenness", top_k),
            "most_productive_translators": self.top(
                "degree", top_k, group=AttributeKind.TRANSLATOR.value
            ),
            "most_translated_authors": self.top("degree", top_k, group=AttributeKind.AUTHOR.value),
        }


def _average_clustering(view: nx.Graph) -> float:
    # Nodes with fewer than two neighbours have no triangles to close and are left out.
    eligible = [node for node, degree in view.degree() if degree >= 2]
    if not eligible:
        return 0.0
    clustering = nx.clustering(view, eligible)
    return sum(clustering.values()) / len(eligible)


def _diameter(view: nx.Graph) -> int:
    # Largest finite eccentricity; disconnected pairs are ignored.
    return max(
        (
            nx.diameter(view.subgraph(component))
            for component in nx.connected_components(view)
            if len(component) > 1
        ),
        default=0,
    )
