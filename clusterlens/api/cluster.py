from pydantic import BaseModel, Field
from typing import List, Optional


class Cluster(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    context: Optional[str] = Field(default=None, description="kubeconfig context")
    prometheus_url: Optional[str] = Field(default=None, alias="prometheusUrl")

    model_config = {
        "populate_by_name": True
    }


class ClusterConfig(BaseModel):
    kind: str = "clusters"
    version: str = "v0.1"
    clusters: List[Cluster] = Field(default_factory=list)
