from pydantic import BaseModel
from typing import List


# API数据模型
class ClusterItem(BaseModel):
    id: str
    name: str


class ClusterListResponse(BaseModel):
    total: int
    items: List[ClusterItem]
