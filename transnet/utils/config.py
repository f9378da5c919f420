"""Configuration loading helpers."""
from __future__ import annotations

import pathlib
from typing import Any, Dict, Mapping, Optional

import yaml

from ..data.models import AnalysisConfig, EdgeType, EntitySpec, NetworkConfig
from .logging import get_logger

LOGGER = get_logger(__name__)


def load_config(path: str | pathlib.Path) -> Dict[str, Any]:
    """Load a YAML configuration file."""
    config_path = pathlib.Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def network_config_from_mapping(section: Optional[Mapping[str, Any]]) -> NetworkConfig:
    """Translate the ``network`` section of a pipeline config."""
    section = section or {}
    config = NetworkConfig(is_directed=bool(section.get("directed", False)))

    entity_keys = section.get("entities")
    if entity_keys:
        config.entity_specs = [EntitySpec.parse(str(key)) for key in entity_keys]

    edge_type_names = section.get("edge_types")
    if edge_type_names is not None:
        enabled = set()
        for name in edge_type_names:
            try:
                enabled.add(EdgeType(str(name).strip().lower()))
            except ValueError:
                LOGGER.warning("Ignoring unknown edge type %r in configuration", name)
        config.enabled_edge_types = frozenset(enabled)
    return config


def analysis_config_from_mapping(section: Optional[Mapping[str, Any]]) -> AnalysisConfig:
    """Translate the ``analytics`` section of a pipeline config."""
    section = section or {}
    defaults = AnalysisConfig()
    config = AnalysisConfig(
        pagerank_iterations=int(section.get("pagerank_iterations", defaults.pagerank_iterations)),
        damping=float(section.get("damping", defaults.damping)),
        community_iterations=int(
            section.get("community_iterations", defaults.community_iterations)
        ),
        seed=section.get("seed", defaults.seed),
        betweenness_sample_threshold=int(
            section.get("betweenness_sample_threshold", defaults.betweenness_sample_threshold)
        ),
        betweenness_sample_fraction=float(
            section.get("betweenness_sample_fraction", defaults.betweenness_sample_fraction)
        ),
        betweenness_seed=int(section.get("betweenness_seed", defaults.betweenness_seed)),
        chunk_size=int(section.get("chunk_size", defaults.chunk_size)),
        top_k=int(section.get("top_k", defaults.top_k)),
    )
    config.validate()
    return config
