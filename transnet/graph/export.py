"""Export analysed graphs as tabular rows, CSV tables and JSON snapshots."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Tuple

import polars as pl  # type: ignore[import-not-found]

from ..data.models import Graph
from ..utils.io import write_json
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

FLOAT_PRECISION = 6

NODE_SCHEMA: Dict[str, pl.DataType] = {
    "id": pl.Utf8,
    "name": pl.Utf8,
    "group": pl.Utf8,
    "degree": pl.Int64,
    "inDegree": pl.Int64,
    "outDegree": pl.Int64,
    "closeness": pl.Float64,
    "betweenness": pl.Float64,
    "pageRank": pl.Float64,
    "community": pl.Int64,
}
EDGE_SCHEMA: Dict[str, pl.DataType] = {
    "source": pl.Utf8,
    "target": pl.Utf8,
    "weight": pl.Int64,
    "type": pl.Utf8,
}
_FLOAT_COLUMNS = ("closeness", "betweenness", "pageRank")


def node_rows(graph: Graph) -> List[Dict[str, str]]:
    """One row per node; normalised metrics fixed to six decimals, counts as integers."""
    rows: List[Dict[str, str]] = []
    for node in graph.nodes.values():
        row: Dict[str, str] = {}
        for column, value in node.to_dict().items():
            if column in _FLOAT_COLUMNS:
                row[column] = f"{float(value):.{FLOAT_PRECISION}f}"
            else:
                row[column] = str(value)
        rows.append(row)
    return rows


def edge_rows(graph: Graph) -> List[Dict[str, str]]:
    return [
        {column: str(value) for column, value in edge.to_dict().items()}
        for edge in graph.edges.values()
    ]


def nodes_frame(graph: Graph) -> pl.DataFrame:
    return pl.DataFrame([node.to_dict() for node in graph.nodes.values()], schema=NODE_SCHEMA)


def edges_frame(graph: Graph) -> pl.DataFrame:
    return pl.DataFrame([edge.to_dict() for edge in graph.edges.values()], schema=EDGE_SCHEMA)


def write_tables(graph: Graph, directory: str | Path) -> Tuple[Path, Path]:
    """Write ``nodes.csv`` and ``edges.csv`` into ``directory``."""
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    nodes_path = output_dir / "nodes.csv"
    edges_path = output_dir / "edges.csv"
    nodes_frame(graph).write_csv(nodes_path, float_precision=FLOAT_PRECISION)
    edges_frame(graph).write_csv(edges_path)
    LOGGER.info(
        "Exported %s node rows and %s edge rows to %s",
        graph.node_count,
        graph.edge_count,
        output_dir,
    )
    return nodes_path, edges_path


def write_graph_snapshot(graph: Graph, path: str | Path) -> None:
    snapshot_path = Path(path)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "directed": graph.is_directed,
        "nodes": [node.to_dict() for node in graph.nodes.values()],
        "edges": [edge.to_dict() for edge in graph.edges.values()],
    }
    write_json(snapshot_path, payload)
    LOGGER.info("Saved graph snapshot to %s", snapshot_path)
