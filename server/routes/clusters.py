from fastapi import APIRouter, HTTPException
import logging

from clusterlens.parser.cluster_parser import ClusterParser, ParserError

from server.models import ClusterItem, ClusterListResponse

router = APIRouter(prefix="/api/v1/clusters", tags=["clusters"])
logger = logging.getLogger(__name__)


@router.get("", response_model=ClusterListResponse)
async def get_clusters():
    """List monitored clusters"""
    try:
        clusters = ClusterParser.load_clusters()
    except ParserError as e:
        logger.error(f"Failed to load cluster registry: {e}")
        raise HTTPException(status_code=500, detail="Cluster registry unavailable")

    return ClusterListResponse(
        total=len(clusters),
        items=[ClusterItem(id=c.id, name=c.name) for c in clusters]
    )
