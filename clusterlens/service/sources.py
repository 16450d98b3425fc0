from typing import Dict, List, Optional

from clusterlens.api.cluster import Cluster
from clusterlens.api.node import NodeInventory, NodeMetric, PodSpec
from clusterlens.api.quota import QuotaObject
from clusterlens.client.metrics_client import MetricsClient
from clusterlens.client.node_client import NodeClient
from clusterlens.client.quota_client import QuotaClient


class ClusterSources:
    """Live sources of one cluster; clients are created on first use"""

    def __init__(self, cluster: Cluster):
        self.cluster = cluster
        self._node_client = None
        self._pods = None

    @property
    def node_client(self) -> NodeClient:
        if self._node_client is None:
            self._node_client = NodeClient(self.cluster.context)
        return self._node_client

    def pods(self) -> List[PodSpec]:
        # Listed once per request, shared by inventory usage and GPU attribution
        if self._pods is None:
            self._pods = self.node_client.list_pods()
        return self._pods

    def inventory(self) -> List[NodeInventory]:
        return self.node_client.list_node_inventory(pods=self.pods())

    def node_inventory(self, node_name: str) -> Optional[NodeInventory]:
        return self.node_client.get_node_inventory(node_name, pods=self.pods())

    def metrics(self) -> List[NodeMetric]:
        return MetricsClient(self.cluster.prometheus_url).list_node_metrics()

    def quotas(self) -> Dict[str, Optional[List[QuotaObject]]]:
        return QuotaClient(self.cluster.context).fetch_namespace_quotas()
