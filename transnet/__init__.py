"""Translation network graph construction and social-network analytics."""

from .analytics.centrality import AnalysisCancelled, compute_metrics
from .analytics.community import detect_communities
from .analytics.metrics import MetricsFacade
from .data.models import (
    AnalysisConfig,
    AttributeKind,
    EdgeType,
    EntitySpec,
    Graph,
    NetworkConfig,
    TranslationRecord,
)
from .graph.builder import build_graph
from .pipelines.session import AnalysisSession

__all__ = [
    "AnalysisCancelled",
    "AnalysisConfig",
    "AnalysisSession",
    "AttributeKind",
    "EdgeType",
    "EntitySpec",
    "Graph",
    "MetricsFacade",
    "NetworkConfig",
    "TranslationRecord",
    "build_graph",
    "compute_metrics",
    "detect_communities",
]
