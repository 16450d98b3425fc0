import logging
from typing import Dict, List, Optional, Union

from clusterlens.api.node import PodGpuUsage, PodSpec
from clusterlens.mapper.filters import apply_filters, is_gpu_resource, pod_in_workload_namespace, pod_on_node
from clusterlens.parser.quantity_parser import parse_quantity

logger = logging.getLogger(__name__)


def pod_gpu_count(pod: PodSpec, gpu_prefix: Optional[str] = None) -> Union[int, float]:
    """Sum of GPU-family limits declared across all containers of a pod, e.g. '500m' -> 0.5"""
    total = 0.0
    for container in pod.containers:
        for resource_name, amount in container.limits.items():
            if is_gpu_resource(resource_name, gpu_prefix):
                total += parse_quantity(amount)
    return int(total) if total.is_integer() else total


def attribute_gpu_pods(pods: List[PodSpec], node_name: str,
                       namespace_prefix: Optional[str] = None,
                       gpu_prefix: Optional[str] = None) -> List[PodGpuUsage]:
    """
    Workload pods on a node that hold GPUs.

    Stages run in order: workload namespace prefix, node assignment, then a
    strictly positive summed GPU limit.
    """
    candidates = apply_filters(pods, [
        pod_in_workload_namespace(namespace_prefix),
        pod_on_node(node_name),
    ])

    result = []
    for pod in candidates:
        gpu_count = pod_gpu_count(pod, gpu_prefix)
        if gpu_count > 0:
            result.append(PodGpuUsage(namespace=pod.namespace, name=pod.name, gpu_count=gpu_count))

    logger.debug(f"Attributed {len(result)} GPU pods to node {node_name}")
    return result


def attribute_gpu_pods_by_node(pods: List[PodSpec], node_names: List[str]) -> Dict[str, List[PodGpuUsage]]:
    """attribute_gpu_pods for several nodes at once"""
    return {node_name: attribute_gpu_pods(pods, node_name) for node_name in node_names}
