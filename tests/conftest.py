import pytest
from unittest.mock import patch

# 导入模拟数据
from mock.nodes import mock_inventory, mock_metrics
from mock.pods import mock_pods
from mock.quotas import mock_quotas_by_namespace

from fastapi.testclient import TestClient
from server.main import app


@pytest.fixture(autouse=True)
def no_cluster_registry():
    """Run every test against the single default cluster"""
    with patch('clusterlens.config.CLUSTERS_FILE', None):
        yield


@pytest.fixture
def test_client():
    """FastAPI测试客户端"""
    return TestClient(app)


@pytest.fixture
def inventory():
    return [node.model_copy(deep=True) for node in mock_inventory]


@pytest.fixture
def metrics():
    return [metric.model_copy(deep=True) for metric in mock_metrics]


@pytest.fixture
def pods():
    return [pod.model_copy(deep=True) for pod in mock_pods]


@pytest.fixture
def quotas_by_namespace():
    return {
        namespace: [quota.model_copy(deep=True) for quota in quotas] if quotas is not None else None
        for namespace, quotas in mock_quotas_by_namespace.items()
    }


@pytest.fixture
def registry_file(tmp_path):
    """Two-cluster registry on disk"""
    path = tmp_path / "clusters.yaml"
    path.write_text(
        "kind: clusters\n"
        "version: v0.1\n"
        "clusters:\n"
        "  - id: prod\n"
        "    name: Production\n"
        "    context: prod-admin\n"
        "    prometheusUrl: http://prometheus.prod:9090\n"
        "  - id: staging\n"
        "    name: Staging\n",
        encoding="utf-8",
    )
    return str(path)
