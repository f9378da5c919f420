"""End-to-end pipeline: load records, build the network, analyse it and export artefacts."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from ..analytics.metrics import MetricsFacade
from ..data.models import TranslationRecord
from ..graph.export import write_graph_snapshot, write_tables
from ..utils.config import (
    analysis_config_from_mapping,
    load_config,
    network_config_from_mapping,
)
from ..utils.io import read_jsonl, write_json
from ..utils.logging import get_logger
from .session import AnalysisSession

LOGGER = get_logger(__name__)


def run_pipeline(config_path: str | Path = "config/pipeline.yaml") -> MetricsFacade:
    config = load_config(config_path)
    network_cfg = network_config_from_mapping(config.get("network"))
    analysis_cfg = analysis_config_from_mapping(config.get("analytics"))

    records = _load_records(config)
    if not records:
        LOGGER.warning("No records were loaded; the network will be empty")

    session = AnalysisSession(network_cfg, analysis_cfg)
    facade = session.recompute(records)
    if facade is None:  # pragma: no cover - single-threaded runs are never superseded
        raise RuntimeError("Analytics pass was superseded before it could be committed")

    output_cfg = config.get("output") or {}
    snapshot_path = output_cfg.get("graph_snapshot_path")
    if snapshot_path:
        write_graph_snapshot(facade.graph, snapshot_path)

    metrics_path = output_cfg.get("metrics_path")
    if metrics_path:
        summary = facade.summary(top_k=analysis_cfg.top_k)
        metadata = summary.get("metadata")
        if isinstance(metadata, dict):
            metadata["record_count"] = len(records)
            if snapshot_path:
                metadata["graph_snapshot_path"] = str(snapshot_path)
        write_json(metrics_path, summary)
        LOGGER.info("Network metrics saved to %s", metrics_path)

    tables_dir = output_cfg.get("tables_dir")
    if tables_dir:
        write_tables(facade.graph, tables_dir)
    return facade


def _load_records(config: Dict[str, Any]) -> List[TranslationRecord]:
    data_cfg = config.get("data") or {}
    records_path = data_cfg.get("records_path")
    if not records_path:
        raise ValueError("data.records_path must be set in the pipeline configuration")
    limit = data_cfg.get("limit")

    records: List[TranslationRecord] = []
    for payload in read_jsonl(records_path):
        if limit and len(records) >= limit:
            break
        if not isinstance(payload, dict):
            LOGGER.debug("Skipping non-object JSONL line in %s", records_path)
            continue
        records.append(TranslationRecord.from_mapping(payload))
    LOGGER.info("Loaded %s records from %s", len(records), records_path)
    return records
