from fastapi import APIRouter, HTTPException, Depends
from typing import Dict, Any
import logging

from clusterlens.api.cluster import Cluster
from clusterlens.service.dashboard import get_gpu_pod_attribution, get_node_detail, get_node_view

from server.dependencies import get_cluster, get_cluster_sources

router = APIRouter(prefix="/api/v1/clusters/{clusterId}/nodes", tags=["nodes"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Dict[str, Any])
async def get_nodes(cluster: Cluster = Depends(get_cluster)):
    """Per-node CPU / memory / GPU view of a cluster"""
    sources = get_cluster_sources(cluster)
    result = get_node_view(sources.inventory, sources.metrics, sources.pods)
    logger.debug(f"Serving {len(result.items)} nodes for {cluster.id} from {result.source.value}")

    return {
        "cluster": cluster.id,
        "source": result.source.value,
        "total": len(result.items),
        "items": [view.to_dict() for view in result.items]
    }


@router.get("/{nodeName}", response_model=Dict[str, Any])
async def get_node(nodeName: str, cluster: Cluster = Depends(get_cluster)):
    """Single node view"""
    sources = get_cluster_sources(cluster)
    result = get_node_detail(sources.node_inventory, sources.metrics, nodeName, sources.pods)

    if not result.items:
        raise HTTPException(status_code=404, detail="Node not found")

    detail = result.items[0].to_dict()
    detail["source"] = result.source.value
    return detail


@router.get("/{nodeName}/pods", response_model=Dict[str, Any])
async def get_node_gpu_pods(nodeName: str, cluster: Cluster = Depends(get_cluster)):
    """Workload pods holding GPUs on a node"""
    sources = get_cluster_sources(cluster)
    pods = get_gpu_pod_attribution(sources.pods, nodeName)

    return {
        "node": nodeName,
        "total": len(pods),
        "items": [pod.to_dict() for pod in pods]
    }
