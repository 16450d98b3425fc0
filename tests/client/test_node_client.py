import pytest
from unittest.mock import MagicMock
from kubernetes import client as k8s_client
from kubernetes.client.rest import ApiException


def _node(name, capacity, allocatable, unschedulable=None):
    return k8s_client.V1Node(
        metadata=k8s_client.V1ObjectMeta(name=name),
        spec=k8s_client.V1NodeSpec(unschedulable=unschedulable),
        status=k8s_client.V1NodeStatus(capacity=capacity, allocatable=allocatable),
    )


def _pod(namespace, name, node_name, phase, limits=None, requests=None):
    return k8s_client.V1Pod(
        metadata=k8s_client.V1ObjectMeta(namespace=namespace, name=name),
        spec=k8s_client.V1PodSpec(
            node_name=node_name,
            containers=[k8s_client.V1Container(
                name="main",
                resources=k8s_client.V1ResourceRequirements(limits=limits, requests=requests),
            )],
        ),
        status=k8s_client.V1PodStatus(phase=phase),
    )


@pytest.fixture
def node_client():
    from clusterlens.client.node_client import NodeClient

    client = NodeClient.__new__(NodeClient)
    client.core_v1 = MagicMock()
    client.core_v1.list_node.return_value = MagicMock(items=[
        _node("gpu-node-1",
              {"cpu": "64", "memory": "512Gi", "nvidia.com/mig-1g.5gb": "7", "pods": "110"},
              {"cpu": "63500m", "memory": "500Gi", "nvidia.com/mig-1g.5gb": "7"}),
        _node("cpu-node-1", {"cpu": "16", "memory": "64Gi"}, {"cpu": "16", "memory": "62Gi"},
              unschedulable=True),
    ])
    client.core_v1.list_pod_for_all_namespaces.return_value = MagicMock(items=[
        _pod("aip-training", "train-0", "gpu-node-1", "Running",
             limits={"nvidia.com/mig-1g.5gb": "2"}, requests={"cpu": "8", "memory": "32Gi"}),
        _pod("aip-training", "train-1", "gpu-node-1", "Pending",
             limits={"nvidia.com/mig-1g.5gb": "1"}, requests={"cpu": "500m", "memory": "512Mi"}),
        _pod("aip-training", "done-0", "gpu-node-1", "Succeeded",
             limits={"nvidia.com/mig-1g.5gb": "4"}, requests={"cpu": "32"}),
        _pod("aip-training", "waiting", None, "Pending", requests={"cpu": "4"}),
    ])
    return client


def test_list_pods(node_client):
    """测试Pod列表转换"""
    pods = node_client.list_pods()

    assert len(pods) == 4
    assert pods[0].namespace == "aip-training"
    assert pods[0].node_name == "gpu-node-1"
    assert pods[0].containers[0].limits == {"nvidia.com/mig-1g.5gb": "2"}
    assert pods[3].node_name is None


def test_list_node_inventory(node_client):
    """测试节点清单：容量、可分配与使用量"""
    nodes = node_client.list_node_inventory()

    gpu_node = nodes[0]
    assert gpu_node.name == "gpu-node-1"
    assert gpu_node.unschedulable is False
    assert gpu_node.cpu.capacity == "64"
    assert gpu_node.cpu.allocatable == "63500m"
    # Running and Pending pods only
    assert gpu_node.cpu.usage == "8.5"
    assert gpu_node.memory.usage == "32.5Gi"
    assert set(gpu_node.gpus) == {"nvidia.com/mig-1g.5gb"}
    assert gpu_node.gpus["nvidia.com/mig-1g.5gb"].usage == "3"
    assert gpu_node.gpus["nvidia.com/mig-1g.5gb"].usage_percentage is None


def test_list_node_inventory_idle_node(node_client):
    cpu_node = node_client.list_node_inventory()[1]

    assert cpu_node.unschedulable is True
    assert cpu_node.cpu.usage == "0.0"
    assert cpu_node.memory.usage == "0.0Gi"
    assert cpu_node.gpus == {}


def test_list_node_inventory_reuses_pods(node_client):
    pods = node_client.list_pods()
    node_client.core_v1.list_pod_for_all_namespaces.reset_mock()

    node_client.list_node_inventory(pods=pods)

    node_client.core_v1.list_pod_for_all_namespaces.assert_not_called()


def test_list_node_inventory_api_error(node_client):
    node_client.core_v1.list_node.side_effect = ApiException(status=403)

    with pytest.raises(PermissionError):
        node_client.list_node_inventory()


def test_get_node_inventory_not_found(node_client):
    node_client.core_v1.read_node.side_effect = ApiException(status=404)

    assert node_client.get_node_inventory("missing-node", pods=[]) is None


def test_get_node_inventory(node_client):
    node_client.core_v1.read_node.return_value = _node("cpu-node-1", {"cpu": "16"}, {"cpu": "15"})

    node = node_client.get_node_inventory("cpu-node-1", pods=[])

    assert node.cpu.allocatable == "15"
    assert node.memory.capacity == "0"
