from fastapi import APIRouter, HTTPException, Depends
from typing import Dict, Any
import logging

from clusterlens.api.cluster import Cluster
from clusterlens.service.dashboard import get_namespace_quotas

from server.dependencies import get_cluster, get_cluster_sources

router = APIRouter(prefix="/api/v1/clusters/{clusterId}/quotas", tags=["quotas"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Dict[str, Any])
async def get_quotas(cluster: Cluster = Depends(get_cluster)):
    """Quota summary of every workload namespace"""
    result = get_namespace_quotas(get_cluster_sources(cluster).quotas)
    return {
        "cluster": cluster.id,
        "source": result.source.value,
        "total": len(result.items),
        "items": [quota.to_dict() for quota in result.items]
    }


@router.get("/{namespace}", response_model=Dict[str, Any])
async def get_quota_detail(namespace: str, cluster: Cluster = Depends(get_cluster)):
    """Quota summary of one namespace"""
    result = get_namespace_quotas(get_cluster_sources(cluster).quotas)

    quota = next((q for q in result.items if q.namespace == namespace), None)
    if quota is None:
        raise HTTPException(status_code=404, detail="Quota not found")

    detail = quota.to_dict()
    detail["source"] = result.source.value
    return detail
