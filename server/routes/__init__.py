from .clusters import router as clusters_router
from .nodes import router as nodes_router
from .metrics import router as metrics_router
from .quotas import router as quotas_router

__all__ = [
    "clusters_router",
    "nodes_router",
    "metrics_router",
    "quotas_router"
]
