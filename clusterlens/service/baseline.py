"""Fixed placeholder data served when the live sources are unavailable.

Values are constant so repeated requests render the same picture; results
built from them are tagged with DataSource.BASELINE.
"""

from typing import List

from clusterlens.api.node import GpuMetric, GpuProfile, NodeInventory, NodeMetric, NodeView, ResourceStat
from clusterlens.api.quota import NamespaceQuota, QuotaObject
from clusterlens.mapper.node_mapper import reconcile
from clusterlens.mapper.quota_mapper import aggregate_namespace_quotas, group_by_namespace

BASELINE_INVENTORY = [
    NodeInventory(
        name="mig-node-1",
        cpu=ResourceStat(capacity="32", allocatable="31900m", usage="14.5"),
        memory=ResourceStat(capacity="256Gi", allocatable="250Gi", usage="150.0Gi"),
        gpus={
            "nvidia.com/mig-1g.5gb": GpuProfile(capacity="7", allocatable="7", usage="6"),
            "nvidia.com/mig-2g.10gb": GpuProfile(capacity="3", allocatable="3", usage="2"),
        },
    ),
    NodeInventory(
        name="mig-node-2",
        cpu=ResourceStat(capacity="32", allocatable="31900m", usage="25.6"),
        memory=ResourceStat(capacity="256Gi", allocatable="250Gi", usage="189.5Gi"),
        gpus={
            "nvidia.com/mig-3g.20gb": GpuProfile(capacity="2", allocatable="2", usage="2"),
        },
    ),
    NodeInventory(
        name="non-mig-gpu-node",
        cpu=ResourceStat(capacity="16", allocatable="15800m", usage="11.2"),
        memory=ResourceStat(capacity="128Gi", allocatable="125Gi", usage="100.0Gi"),
        gpus={
            "nvidia.com/gpu": GpuProfile(capacity="4", allocatable="4", usage="2"),
        },
    ),
    NodeInventory(
        name="no-gpu-node",
        cpu=ResourceStat(capacity="8", allocatable="7800m", usage="1.2"),
        memory=ResourceStat(capacity="32Gi", allocatable="31Gi", usage="9.5Gi"),
    ),
]

BASELINE_METRICS = [
    NodeMetric(
        node="mig-node-1",
        cpu_usage_percentage=45.5,
        memory_usage_percentage=60.1,
        gpu_usage_percentage=77.5,
        gpus={
            "nvidia.com/mig-1g.5gb": GpuMetric(usage_percentage=90),
            "nvidia.com/mig-2g.10gb": GpuMetric(usage_percentage=65),
        },
    ),
    NodeMetric(
        node="mig-node-2",
        cpu_usage_percentage=80.2,
        memory_usage_percentage=75.8,
        gpu_usage_percentage=95.0,
        gpus={"nvidia.com/mig-3g.20gb": GpuMetric(usage_percentage=95)},
    ),
    NodeMetric(
        node="non-mig-gpu-node",
        cpu_usage_percentage=70.0,
        memory_usage_percentage=80.0,
        gpu_usage_percentage=50.0,
        gpus={"nvidia.com/gpu": GpuMetric(usage_percentage=50)},
    ),
    NodeMetric(
        node="no-gpu-node",
        cpu_usage_percentage=15.0,
        memory_usage_percentage=30.5,
        gpu_usage_percentage=0,
    ),
]


def _baseline_quota(namespace: str, cpu_used: int, memory_used: int,
                    storage_used: int, gpus_used: tuple) -> QuotaObject:
    mig_1g, mig_2g, mig_3g = gpus_used
    return QuotaObject(
        name=f"{namespace}-quota",
        namespace=namespace,
        hard={
            "limits.cpu": "100",
            "limits.memory": "500Gi",
            "requests.storage": "1000Gi",
            "requests.nvidia.com/mig-1g.5gb": "2",
            "requests.nvidia.com/mig-2g.10gb": "2",
            "requests.nvidia.com/mig-3g.20gb": "4",
        },
        used={
            "limits.cpu": str(cpu_used),
            "limits.memory": f"{memory_used}Gi",
            "requests.storage": f"{storage_used}Gi",
            "requests.nvidia.com/mig-1g.5gb": str(mig_1g),
            "requests.nvidia.com/mig-2g.10gb": str(mig_2g),
            "requests.nvidia.com/mig-3g.20gb": str(mig_3g),
        },
    )


BASELINE_QUOTAS = [
    _baseline_quota("aip-training", 72, 380, 640, (2, 1, 3)),
    _baseline_quota("aip-inference", 48, 210, 320, (1, 2, 1)),
    _baseline_quota("aip-research", 35, 150, 700, (1, 0, 2)),
    _baseline_quota("aip-sandbox", 6, 24, 40, (0, 0, 0)),
    _baseline_quota("aip-bi-team", 18, 96, 150, (1, 1, 0)),
]


def baseline_node_views() -> List[NodeView]:
    return reconcile(BASELINE_INVENTORY, BASELINE_METRICS)


def baseline_namespace_quotas() -> List[NamespaceQuota]:
    return aggregate_namespace_quotas(group_by_namespace(BASELINE_QUOTAS))
