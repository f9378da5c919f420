"""Degree, closeness, betweenness and PageRank centrality over a built graph.

Closeness and betweenness run on an undirected networkx view of the network
(every edge is traversable in both directions, unit length) whatever the
directedness mode; PageRank and the in/out degree split follow edge direction
when the graph is analysed as directed.
"""
from __future__ import annotations

import math
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence

import networkx as nx
import numpy as np

from ..data.models import AnalysisConfig, CentralityResult, DegreeResult, Graph
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

Adjacency = List[List[int]]


class AnalysisCancelled(RuntimeError):
    """Raised when a superseded analytics pass stops at a chunk boundary."""


def compute_degrees(graph: Graph, is_directed: bool) -> Dict[str, DegreeResult]:
    """Weighted in/out/total degree per node.

    In undirected mode both counters hold the same value and ``degree`` is
    that value, i.e. the sum of incident edge weights.
    """
    in_degree: Counter = Counter()
    out_degree: Counter = Counter()
    for edge in graph.edges.values():
        out_degree[edge.source] += edge.weight
        in_degree[edge.target] += edge.weight
        if not is_directed:
            out_degree[edge.target] += edge.weight
            in_degree[edge.source] += edge.weight

    results: Dict[str, DegreeResult] = {}
    for node_id in graph.nodes:
        node_in = in_degree[node_id]
        node_out = out_degree[node_id]
        degree = node_in + node_out if is_directed else node_out
        results[node_id] = DegreeResult(degree=degree, in_degree=node_in, out_degree=node_out)
    return results


def structural_adjacency(graph: Graph) -> Adjacency:
    """Undirected, de-duplicated neighbour lists indexed by node insertion order."""
    index = {node_id: position for position, node_id in enumerate(graph.nodes)}
    neighbours: List[set] = [set() for _ in index]
    for edge in graph.edges.values():
        source = index.get(edge.source)
        target = index.get(edge.target)
        if source is None or target is None or source == target:
            continue
        neighbours[source].add(target)
        neighbours[target].add(source)
    return [sorted(items) for items in neighbours]


def structural_graph(graph: Graph) -> nx.Graph:
    """Undirected networkx view of the translation network, nodes in insertion order."""
    view = nx.Graph()
    view.add_nodes_from(graph.nodes)
    view.add_edges_from(
        (edge.source, edge.target)
        for edge in graph.edges.values()
        if edge.source != edge.target and edge.source in view and edge.target in view
    )
    return view


def flow_adjacency(graph: Graph, is_directed: bool) -> Adjacency:
    """Out-neighbour lists used by PageRank."""
    if not is_directed:
        return structural_adjacency(graph)
    index = {node_id: position for position, node_id in enumerate(graph.nodes)}
    neighbours: List[set] = [set() for _ in index]
    for edge in graph.edges.values():
        source = index.get(edge.source)
        target = index.get(edge.target)
        if source is None or target is None or source == target:
            continue
        neighbours[source].add(target)
    return [sorted(items) for items in neighbours]


def closeness_centrality(view: nx.Graph) -> Dict[str, float]:
    """Reachable count divided by the sum of distances to reachable nodes."""
    return nx.closeness_centrality(view, wf_improved=False)


def betweenness_sources(n: int, config: AnalysisConfig) -> Sequence[int]:
    """Positions of the source nodes used for betweenness.

    Graphs above ``betweenness_sample_threshold`` nodes use
    ``ceil(betweenness_sample_fraction * n)`` sources drawn without
    replacement by a numpy generator seeded with ``betweenness_seed``.
    """
    if n <= config.betweenness_sample_threshold:
        return range(n)
    sample_size = max(1, math.ceil(config.betweenness_sample_fraction * n))
    if sample_size >= n:
        return range(n)
    rng = np.random.default_rng(config.betweenness_seed)
    return sorted(int(value) for value in rng.choice(n, size=sample_size, replace=False))


def betweenness_centrality(
    view: nx.Graph,
    is_directed: bool,
    config: Optional[AnalysisConfig] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> Dict[str, float]:
    """Normalised shortest-path betweenness over unit-length paths.

    Sources are processed in chunks of ``config.chunk_size``; ``should_continue``
    is polled before every chunk and a False answer raises `AnalysisCancelled`.
    """
    config = config or AnalysisConfig()
    node_ids = list(view)
    n = len(node_ids)
    scores = np.zeros(n, dtype=np.float64)
    if n == 0:
        return {}

    sources = [node_ids[position] for position in betweenness_sources(n, config)]
    for start in range(0, len(sources), config.chunk_size):
        if should_continue is not None and not should_continue():
            raise AnalysisCancelled("Betweenness pass superseded by a newer generation")
        # Unnormalised subset scores on an undirected graph count each unordered pair once.
        partial = nx.betweenness_centrality_subset(
            view,
            sources=sources[start:start + config.chunk_size],
            targets=node_ids,
            normalized=False,
        )
        scores += np.array([partial[node_id] for node_id in node_ids], dtype=np.float64)

    if len(sources) < n:
        scores *= n / len(sources)
    if is_directed:
        # Ordered pairs: both traversal directions of the structural view count.
        scores *= 2.0
    if n > 2:
        scale = 1.0 if is_directed else 2.0
        scores *= scale / ((n - 1) * (n - 2))
    return {node_id: float(value) for node_id, value in zip(node_ids, scores)}




def pagerank(
    neighbours: Adjacency,
    damping: float = 0.85,
    iterations: int = 20,
) -> List[float]:
    """Synchronous power iteration starting from a uniform 1/n distribution.

    Dangling nodes spread their mass uniformly over every node, so the ranks
    keep summing to one.
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")
    n = len(neighbours)
    if n == 0:
        return []

    out_counts = np.array([len(items) for items in neighbours], dtype=np.float64)
    sources = np.array(
        [source for source, items in enumerate(neighbours) for _ in items], dtype=np.int64
    )
    targets = np.array([target for items in neighbours for target in items], dtype=np.int64)
    dangling = out_counts == 0

    rank = np.full(n, 1.0 / n)
    for _ in range(iterations):
        updated = np.full(n, (1.0 - damping) / n)
        updated += damping * rank[dangling].sum() / n
        if sources.size:
            np.add.at(updated, targets, damping * rank[sources] / out_counts[sources])
        rank = updated
    return [float(value) for value in rank]


def compute_centrality(
    graph: Graph,
    is_directed: bool,
    config: Optional[AnalysisConfig] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> Dict[str, CentralityResult]:
    config = config or AnalysisConfig()
    node_ids = graph.node_ids()
    view = structural_graph(graph)

    started = time.perf_counter()
    closeness = closeness_centrality(view)
    betweenness = betweenness_centrality(view, is_directed, config, should_continue)
    ranks = pagerank(
        flow_adjacency(graph, is_directed),
        damping=config.damping,
        iterations=config.pagerank_iterations,
    )
    LOGGER.debug(
        "Centrality for %s nodes computed in %.3fs", len(node_ids), time.perf_counter() - started
    )
    return {
        node_id: CentralityResult(
            closeness=float(closeness[node_id]),
            betweenness=betweenness[node_id],
            page_rank=ranks[position],
        )
        for position, node_id in enumerate(node_ids)
    }


def compute_metrics(
    graph: Graph,
    is_directed: Optional[bool] = None,
    config: Optional[AnalysisConfig] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> Graph:
    """Recompute degree and centrality metrics and merge them into the graph's nodes.

    Results are merged only after every metric has been computed, so a
    cancelled pass leaves the node metrics untouched.
    """
    if graph is None:
        raise ValueError("graph must not be None")
    config = config or AnalysisConfig()
    config.validate()
    directed = graph.is_directed if is_directed is None else is_directed

    degrees = compute_degrees(graph, directed)
    centrality = compute_centrality(graph, directed, config, should_continue)
    graph.apply(degrees)
    graph.apply(centrality)
    LOGGER.info(
        "Computed metrics for %s nodes and %s edges (directed=%s)",
        graph.node_count,
        graph.edge_count,
        directed,
    )
    return graph
