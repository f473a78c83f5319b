"""Assemble a StatisticsSnapshot from Elasticsearch REST responses.

The input document bundles the raw API bodies under fixed keys::

    {
      "cluster_health":   GET _cluster/health?level=indices
      "node_stats":       GET _nodes/_local/stats  (or a single node object)
      "indices_stats":    GET _stats
      "cluster_settings": GET _cluster/settings?include_defaults=true
      "cluster_name" / "node_name" / "node_id": optional topology overrides
    }

Any key may be missing or null; the matching sub-structure is then ``None``.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..utils.exceptions import SnapshotError
from .mapping import optional
from .models import ClusterHealth, IndicesStats, NodeStats, StatisticsSnapshot
from .watermarks import allocation_settings_from_cluster_settings

logger = logging.getLogger(__name__)

__all__ = ["load_node_stats", "load_snapshot", "load_snapshot_file"]


def load_node_stats(raw: Any) -> tuple[NodeStats | None, str | None]:
    """Return the local node's stats and the cluster name the response carries, if any."""
    if raw is None:
        return None, None
    if not isinstance(raw, Mapping):
        raise SnapshotError(f"node_stats: expected a JSON object, got {type(raw).__name__}")
    if "nodes" not in raw:
        return NodeStats.from_dict(raw, raw.get("node_id")), None
    nodes = raw.get("nodes") or {}
    if not isinstance(nodes, Mapping):
        raise SnapshotError("node_stats.nodes: expected a JSON object")
    if not nodes:
        logger.warning("node stats response contains no nodes")
        return None, raw.get("cluster_name")
    if len(nodes) > 1:
        logger.warning("node stats response has %d nodes; using the first", len(nodes))
    node_id, body = next(iter(nodes.items()))
    return NodeStats.from_dict(body, node_id), raw.get("cluster_name")


def load_snapshot(document: Mapping[str, Any]) -> StatisticsSnapshot:
    if not isinstance(document, Mapping):
        raise SnapshotError(f"snapshot: expected a JSON object, got {type(document).__name__}")
    node_stats, nodes_cluster_name = load_node_stats(document.get("node_stats"))
    settings_doc = document.get("cluster_settings")
    snapshot = StatisticsSnapshot(
        cluster_name=document.get("cluster_name") or nodes_cluster_name,
        node_name=document.get("node_name"),
        node_id=document.get("node_id"),
        cluster_health=optional(ClusterHealth, document.get("cluster_health")),
        node_stats=node_stats,
        indices_stats=optional(IndicesStats, document.get("indices_stats")),
        allocation_settings=None if settings_doc is None else allocation_settings_from_cluster_settings(settings_doc),
    )
    missing = [k for k in ("cluster_health", "node_stats", "indices_stats", "cluster_settings") if document.get(k) is None]
    if missing:
        logger.debug("snapshot sections absent: %s", ", ".join(missing))
    return snapshot


def load_snapshot_file(path: str | Path) -> StatisticsSnapshot:
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            document = json.load(fh)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"{p}: invalid JSON ({exc})") from exc
    except OSError as exc:
        raise SnapshotError(f"{p}: cannot read snapshot ({exc})") from exc
    return load_snapshot(document)
