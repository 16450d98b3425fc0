from fastapi import APIRouter, Depends
from typing import Dict, Any

from clusterlens.api.cluster import Cluster
from clusterlens.service.dashboard import get_node_metrics

from server.dependencies import get_cluster, get_cluster_sources

router = APIRouter(prefix="/api/v1/clusters/{clusterId}/metrics", tags=["metrics"])


@router.get("", response_model=Dict[str, Any])
async def get_metrics(cluster: Cluster = Depends(get_cluster)):
    """Raw per-node usage percentages"""
    result = get_node_metrics(get_cluster_sources(cluster).metrics)
    return {
        "source": result.source.value,
        "total": len(result.items),
        "items": [metric.to_dict() for metric in result.items]
    }
