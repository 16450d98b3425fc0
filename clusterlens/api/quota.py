from pydantic import Field
from typing import Dict, List

from clusterlens.api.common import CamelModel, Quantity, SourcedResult


class QuotaStat(CamelModel):
    used: str
    limit: str
    unit: str
    used_value: float = 0.0
    limit_value: float = 0.0
    # Clamped to [0, 100]; used/limit themselves are reported unclamped
    usage_percentage: float = 0.0


class QuotaObject(CamelModel):
    """One ResourceQuota as listed from a namespace"""

    name: str = ""
    namespace: str
    hard: Dict[str, Quantity] = Field(default_factory=dict)
    used: Dict[str, Quantity] = Field(default_factory=dict)


class NamespaceQuota(CamelModel):
    namespace: str
    cpu: QuotaStat
    memory: QuotaStat
    storage: QuotaStat
    gpu: Dict[str, QuotaStat] = Field(default_factory=dict)


class NamespaceQuotaResult(SourcedResult):
    items: List[NamespaceQuota] = Field(default_factory=list)
