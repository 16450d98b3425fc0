from pydantic import Field
from typing import Dict, List, Optional, Union

from clusterlens.api.common import CamelModel, Quantity, SourcedResult


class ResourceStat(CamelModel):
    capacity: str = "0"
    allocatable: str = "0"
    usage: str = "0"
    # Only set once a matching metric record exists
    usage_percentage: Optional[float] = None


class GpuProfile(ResourceStat):
    """One GPU resource (MIG profile or whole GPU) on a node"""


class GpuMetric(CamelModel):
    usage_percentage: float = 0.0


class NodeInventory(CamelModel):
    name: str
    unschedulable: bool = False
    cpu: ResourceStat = Field(default_factory=ResourceStat)
    memory: ResourceStat = Field(default_factory=ResourceStat)
    gpus: Dict[str, GpuProfile] = Field(default_factory=dict)


class NodeMetric(CamelModel):
    node: str
    cpu_usage_percentage: Optional[float] = None
    memory_usage_percentage: Optional[float] = None
    gpu_usage_percentage: Optional[float] = None
    gpus: Dict[str, GpuMetric] = Field(default_factory=dict)


class PodGpuUsage(CamelModel):
    namespace: str
    name: str
    gpu_count: Union[int, float]


class NodeView(CamelModel):
    name: str
    unschedulable: bool = False
    cpu: ResourceStat = Field(default_factory=ResourceStat)
    memory: ResourceStat = Field(default_factory=ResourceStat)
    gpus: Dict[str, GpuProfile] = Field(default_factory=dict)
    gpu_usage_percentage: Optional[float] = None
    pods: List[PodGpuUsage] = Field(default_factory=list)

    @property
    def cpu_usage_percentage(self) -> Optional[float]:
        return self.cpu.usage_percentage

    @property
    def memory_usage_percentage(self) -> Optional[float]:
        return self.memory.usage_percentage


class ContainerSpec(CamelModel):
    name: str = ""
    limits: Dict[str, Quantity] = Field(default_factory=dict)
    requests: Dict[str, Quantity] = Field(default_factory=dict)


class PodSpec(CamelModel):
    namespace: str
    name: str
    node_name: Optional[str] = None
    phase: Optional[str] = None
    containers: List[ContainerSpec] = Field(default_factory=list)


class NodeViewResult(SourcedResult):
    items: List[NodeView] = Field(default_factory=list)


class NodeMetricResult(SourcedResult):
    items: List[NodeMetric] = Field(default_factory=list)
