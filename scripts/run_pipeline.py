"""CLI entry point to build and analyse the translation network."""
from __future__ import annotations

# ruff: noqa: E402

import argparse
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from transnet.pipelines.analyze import run_pipeline
from transnet.utils.logging import configure_root_logger, get_logger

LOGGER = get_logger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Build and analyse the translation network")
    parser.add_argument(
        "--config",
        default="config/pipeline.yaml",
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level name (defaults to TRANSNET_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()
    configure_root_logger(args.log_level)
    facade = run_pipeline(args.config)
    LOGGER.info(
        "Network has %s nodes, %s edges and %s communities",
        facade.graph.node_count,
        facade.graph.edge_count,
        facade.community_count(),
    )


if __name__ == "__main__":
    main()
