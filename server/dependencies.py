from fastapi import HTTPException, Path
import logging

from clusterlens.api.cluster import Cluster
from clusterlens.parser.cluster_parser import ClusterParser, ParserError
from clusterlens.service.sources import ClusterSources

logger = logging.getLogger(__name__)


def get_cluster(clusterId: str = Path(..., description="Cluster id")) -> Cluster:
    """Resolve the cluster from the registry"""
    try:
        cluster = ClusterParser.find_cluster(clusterId)
    except ParserError as e:
        logger.error(f"Failed to load cluster registry: {e}")
        raise HTTPException(status_code=500, detail="Cluster registry unavailable")

    if cluster is None:
        raise HTTPException(status_code=404, detail=f"Cluster not found: {clusterId}")
    return cluster


def get_cluster_sources(cluster: Cluster) -> ClusterSources:
    """Live data sources of a cluster"""
    return ClusterSources(cluster)
