from .base_client import KubernetesClient
from kubernetes.client.rest import ApiException
from typing import Any, Dict, List, Optional
import logging

from clusterlens.api.node import ContainerSpec, GpuProfile, NodeInventory, PodSpec, ResourceStat
from clusterlens.constants import ACTIVE_POD_PHASES, NodeResources
from clusterlens.mapper.filters import is_gpu_resource
from clusterlens.parser.quantity_parser import format_bytes, format_cores, format_count, parse_quantity

logger = logging.getLogger(__name__)


class NodeClient(KubernetesClient):
    """Node inventory and pod listing client"""

    def list_pods(self) -> List[PodSpec]:
        """List every pod in the cluster with its node assignment and container resources"""
        try:
            pods = self.core_v1.list_pod_for_all_namespaces()
            return [self._build_pod_spec(pod) for pod in pods.items]
        except ApiException as e:
            self.handle_api_exception(e, "list pods")

    def list_node_inventory(self, pods: Optional[List[PodSpec]] = None) -> List[NodeInventory]:
        """List capacity/allocatable/usage for every node"""
        try:
            nodes = self.core_v1.list_node()
        except ApiException as e:
            self.handle_api_exception(e, "list nodes")

        if pods is None:
            pods = self.list_pods()
        node_usage = self._aggregate_node_usage(pods)

        return [
            self._build_node_inventory(node, node_usage.get(node.metadata.name))
            for node in nodes.items
        ]

    def get_node_inventory(self, node_name: str,
                           pods: Optional[List[PodSpec]] = None) -> Optional[NodeInventory]:
        """Get inventory for a single node"""
        try:
            node = self.core_v1.read_node(node_name)
        except ApiException as e:
            if e.status == 404:
                return None
            self.handle_api_exception(e, f"get node {node_name}")

        if pods is None:
            pods = self.list_pods()
        node_usage = self._aggregate_node_usage(pods)
        return self._build_node_inventory(node, node_usage.get(node_name))

    def _aggregate_node_usage(self, pods: List[PodSpec]) -> Dict[str, Dict[str, Any]]:
        """Sum requests (cpu, memory) and GPU limits of active pods per node"""
        node_usage: Dict[str, Dict[str, Any]] = {}

        for pod in pods:
            if pod.phase not in ACTIVE_POD_PHASES or not pod.node_name:
                continue

            usage = node_usage.setdefault(pod.node_name, {"cpu": 0.0, "memory": 0.0, "gpus": {}})
            for container in pod.containers:
                usage["cpu"] += parse_quantity(container.requests.get(NodeResources.CPU))
                usage["memory"] += parse_quantity(container.requests.get(NodeResources.MEMORY))
                for resource_name, amount in container.limits.items():
                    if is_gpu_resource(resource_name):
                        usage["gpus"][resource_name] = (
                            usage["gpus"].get(resource_name, 0.0) + parse_quantity(amount)
                        )

        return node_usage

    def _build_node_inventory(self, node: Any, usage: Optional[Dict[str, Any]] = None) -> NodeInventory:
        """Build a NodeInventory from a V1Node"""
        usage = usage or {"cpu": 0.0, "memory": 0.0, "gpus": {}}
        capacity = (node.status.capacity if node.status else None) or {}
        allocatable = (node.status.allocatable if node.status else None) or {}

        gpus = {}
        for resource_name, amount in capacity.items():
            if not is_gpu_resource(resource_name):
                continue
            gpus[resource_name] = GpuProfile(
                capacity=str(amount),
                allocatable=str(allocatable.get(resource_name, "0")),
                usage=format_count(usage["gpus"].get(resource_name, 0.0)),
            )

        return NodeInventory(
            name=node.metadata.name,
            unschedulable=bool(node.spec.unschedulable) if node.spec else False,
            cpu=ResourceStat(
                capacity=str(capacity.get(NodeResources.CPU, "0")),
                allocatable=str(allocatable.get(NodeResources.CPU, "0")),
                usage=format_cores(usage["cpu"]),
            ),
            memory=ResourceStat(
                capacity=str(capacity.get(NodeResources.MEMORY, "0")),
                allocatable=str(allocatable.get(NodeResources.MEMORY, "0")),
                usage=format_bytes(usage["memory"]),
            ),
            gpus=gpus,
        )

    def _build_pod_spec(self, pod: Any) -> PodSpec:
        """Build a PodSpec from a V1Pod"""
        containers = []
        for container in (pod.spec.containers if pod.spec else None) or []:
            resources = container.resources
            containers.append(ContainerSpec(
                name=container.name or "",
                limits=(resources.limits if resources else None) or {},
                requests=(resources.requests if resources else None) or {},
            ))

        return PodSpec(
            namespace=pod.metadata.namespace,
            name=pod.metadata.name,
            node_name=pod.spec.node_name if pod.spec else None,
            phase=pod.status.phase if pod.status else None,
            containers=containers,
        )
