from typing import Dict, List, Optional

from clusterlens.api.node import GpuMetric, GpuProfile, NodeInventory, NodeMetric, NodeView
from clusterlens.constants import UNKNOWN


def find_metric(node_name: str, metrics: List[NodeMetric]) -> Optional[NodeMetric]:
    """First metric record for the node (exact, case-sensitive name match)"""
    for metric in metrics:
        if metric.node == node_name:
            return metric
    return None


def merge_gpus(inventory_gpus: Dict[str, GpuProfile],
               metric_gpus: Dict[str, GpuMetric]) -> Dict[str, GpuProfile]:
    """
    Union of inventory and metric GPU maps keyed by resource name.

    A profile reported only by metrics still gets an entry, with UNKNOWN
    capacity/allocatable/usage, so its usage signal is not dropped.
    """
    merged = {key: profile.model_copy() for key, profile in inventory_gpus.items()}

    for key, gpu_metric in metric_gpus.items():
        if key in merged:
            merged[key] = merged[key].model_copy(
                update={"usage_percentage": gpu_metric.usage_percentage}
            )
        else:
            merged[key] = GpuProfile(
                capacity=UNKNOWN,
                allocatable=UNKNOWN,
                usage=UNKNOWN,
                usage_percentage=gpu_metric.usage_percentage,
            )

    return merged


def build_node_view(node: NodeInventory, metric: Optional[NodeMetric]) -> NodeView:
    """Compose one NodeView; without a metric every percentage stays unset"""
    if metric is None:
        return NodeView(
            name=node.name,
            unschedulable=node.unschedulable,
            cpu=node.cpu.model_copy(),
            memory=node.memory.model_copy(),
            gpus={key: profile.model_copy() for key, profile in node.gpus.items()},
        )

    return NodeView(
        name=node.name,
        unschedulable=node.unschedulable,
        cpu=node.cpu.model_copy(update={"usage_percentage": metric.cpu_usage_percentage}),
        memory=node.memory.model_copy(update={"usage_percentage": metric.memory_usage_percentage}),
        gpus=merge_gpus(node.gpus, metric.gpus),
        gpu_usage_percentage=metric.gpu_usage_percentage,
    )


def reconcile(nodes: List[NodeInventory], metrics: List[NodeMetric]) -> List[NodeView]:
    """Join node inventory with usage metrics by node name"""
    return [build_node_view(node, find_metric(node.name, metrics)) for node in nodes]
