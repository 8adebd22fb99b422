"""Person cluster export to JSON records, plus a batch summary."""

import json
import logging
from dataclasses import asdict
from pathlib import Path

from email_identity.identity.cluster import PersonCluster

logger = logging.getLogger(__name__)


def cluster_to_record(cluster: PersonCluster) -> dict:
    """Serialize one cluster; sets are emitted as sorted lists."""
    return {
        "cluster_id": cluster.cluster_id,
        "canonical_name": cluster.canonical_name,
        "email_addresses": sorted(cluster.email_addresses),
        "names": sorted(cluster.names),
        "mentions": [asdict(m) for m in cluster.mentions],
    }


def cluster_summary(clusters: list[PersonCluster]) -> dict:
    return {
        "clusters": len(clusters),
        "with_address": sum(1 for c in clusters if not c.is_name_only),
        "name_only": sum(1 for c in clusters if c.is_name_only),
        "mentions": sum(len(c.mentions) for c in clusters),
    }


def write_clusters(clusters: list[PersonCluster], path: Path) -> None:
    """Write clusters to `path` as an indented JSON list."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [cluster_to_record(c) for c in clusters]
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {len(records)} clusters to {path}")
