"""Predicates used by the quota and pod pipelines.

Each predicate takes a single value and returns a bool so the pipelines can
be composed from a list of them; changing an allow-list or prefix never
touches the aggregation loops.
"""

from typing import Callable, Iterable, Optional, Sequence

from clusterlens import config
from clusterlens.api.node import PodSpec

PodPredicate = Callable[[PodSpec], bool]


def is_workload_namespace(namespace: Optional[str], prefix: Optional[str] = None) -> bool:
    """Namespace belongs to a workload tenant, e.g. 'aip-training'"""
    prefix = config.WORKLOAD_NAMESPACE_PREFIX if prefix is None else prefix
    return bool(namespace) and namespace.startswith(prefix)


def is_gpu_resource(resource_name: str, prefix: Optional[str] = None) -> bool:
    """Resource name is in the GPU family, e.g. 'nvidia.com/mig-1g.5gb'"""
    prefix = config.GPU_RESOURCE_PREFIX if prefix is None else prefix
    return resource_name.startswith(prefix)


def match_quota_gpu_resource(resource_key: str,
                             targets: Optional[Sequence[str]] = None) -> Optional[str]:
    """Return the allow-listed resource a quota key refers to, or None.

    'requests.nvidia.com/gpu' and 'nvidia.com/gpu' both match 'nvidia.com/gpu'.
    """
    targets = config.QUOTA_GPU_RESOURCES if targets is None else targets
    for target in targets:
        if resource_key == target or resource_key.endswith(target):
            return target
    return None


def pod_in_workload_namespace(prefix: Optional[str] = None) -> PodPredicate:
    return lambda pod: is_workload_namespace(pod.namespace, prefix)


def pod_on_node(node_name: str) -> PodPredicate:
    return lambda pod: pod.node_name == node_name


def apply_filters(pods: Iterable[PodSpec], predicates: Sequence[PodPredicate]) -> list:
    """Keep pods passing every predicate, evaluated in the given order"""
    result = []
    for pod in pods:
        if all(predicate(pod) for predicate in predicates):
            result.append(pod)
    return result
