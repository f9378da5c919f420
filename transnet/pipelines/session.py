"""Generation-tracked recomputation of the analysed graph."""
from __future__ import annotations

import threading
from typing import Any, Iterable, Optional

from ..analytics.centrality import AnalysisCancelled, compute_metrics
from ..analytics.community import detect_communities
from ..analytics.metrics import MetricsFacade
from ..data.models import AnalysisConfig, NetworkConfig
from ..graph.builder import build_graph
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


class AnalysisSession:
    """Keep the latest committed analysis and discard passes that were superseded.

    Every call to `begin` issues a new generation token. Only a pass whose
    token is still the newest when it finishes may commit its result.
    """

    def __init__(
        self,
        network_config: Optional[NetworkConfig] = None,
        analysis_config: Optional[AnalysisConfig] = None,
    ) -> None:
        self.network_config = network_config or NetworkConfig()
        self.analysis_config = analysis_config or AnalysisConfig()
        self._lock = threading.Lock()
        self._generation = 0
        self._committed_generation: Optional[int] = None
        self._current: Optional[MetricsFacade] = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def current(self) -> Optional[MetricsFacade]:
        with self._lock:
            return self._current

    @property
    def committed_generation(self) -> Optional[int]:
        with self._lock:
            return self._committed_generation

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._generation

    def commit(self, token: int, facade: MetricsFacade) -> bool:
        with self._lock:
            if token != self._generation:
                LOGGER.info(
                    "Discarding stale result of generation %s (current is %s)",
                    token,
                    self._generation,
                )
                return False
            self._current = facade
            self._committed_generation = token
            return True

    def recompute(
        self,
        records: Iterable[Any],
        network_config: Optional[NetworkConfig] = None,
        analysis_config: Optional[AnalysisConfig] = None,
    ) -> Optional[MetricsFacade]:
        """Rebuild and analyse the graph; returns None when the pass was superseded."""
        if network_config is not None:
            self.network_config = network_config
        if analysis_config is not None:
            self.analysis_config = analysis_config
        network_cfg = self.network_config
        analysis_cfg = self.analysis_config
        analysis_cfg.validate()

        token = self.begin()
        graph = build_graph(records, network_cfg)
        try:
            compute_metrics(
                graph,
                network_cfg.is_directed,
                analysis_cfg,
                should_continue=lambda: self.is_current(token),
            )
        except AnalysisCancelled:
            LOGGER.info("Analytics pass for generation %s cancelled", token)
            return None
        if not self.is_current(token):
            LOGGER.info("Analytics pass for generation %s superseded", token)
            return None
        detect_communities(graph, analysis_cfg.community_iterations, analysis_cfg.seed)

        facade = MetricsFacade(graph)
        if not self.commit(token, facade):
            return None
        return facade
