"""Community detection via randomised label propagation."""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..data.models import CommunityResult, Graph
from ..utils.logging import get_logger
from .centrality import Adjacency, structural_adjacency

LOGGER = get_logger(__name__)

DEFAULT_ITERATIONS = 5


def label_propagation(
    neighbours: Adjacency,
    iterations: int = DEFAULT_ITERATIONS,
    seed: Optional[int] = None,
) -> List[int]:
    """Return one raw label per node.

    Every node starts with its own index as label. Each iteration visits the
    nodes in a fresh random order and lets each node adopt a label drawn
    uniformly among the most frequent labels of its neighbours; nodes without
    neighbours keep their label. Updates are visible to nodes visited later
    in the same sweep.
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")
    n = len(neighbours)
    rng = np.random.default_rng(seed)
    labels = list(range(n))
    for _ in range(iterations):
        for node in rng.permutation(n):
            node = int(node)
            if not neighbours[node]:
                continue
            tally = Counter(labels[neighbour] for neighbour in neighbours[node])
            best = max(tally.values())
            candidates = sorted(label for label, count in tally.items() if count == best)
            labels[node] = candidates[int(rng.integers(len(candidates)))]
    return labels


def dense_labels(labels: Sequence[int]) -> List[int]:
    """Renumber labels to 0..k-1 in order of first appearance."""
    mapping: Dict[int, int] = {}
    for label in labels:
        mapping.setdefault(label, len(mapping))
    return [mapping[label] for label in labels]


def detect_communities(
    graph: Graph,
    iterations: int = DEFAULT_ITERATIONS,
    seed: Optional[int] = None,
) -> Graph:
    """Assign a dense community label to every node of ``graph``."""
    if graph is None:
        raise ValueError("graph must not be None")
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    labels = dense_labels(label_propagation(structural_adjacency(graph), iterations, seed))
    graph.apply(
        {
            node_id: CommunityResult(community=labels[position])
            for position, node_id in enumerate(graph.node_ids())
        }
    )
    LOGGER.info(
        "Detected %s communities across %s nodes", len(set(labels)), graph.node_count
    )
    return graph
