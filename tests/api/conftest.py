import pytest
from unittest.mock import patch, MagicMock


@pytest.fixture
def client():
    """创建测试客户端"""
    from fastapi.testclient import TestClient
    from server.main import app
    return TestClient(app)


@pytest.fixture
def mock_sources(inventory, metrics, pods, quotas_by_namespace):
    """Patch live cluster sources with mock data in every route module"""
    sources = MagicMock()
    sources.inventory.side_effect = lambda: inventory
    sources.node_inventory.side_effect = lambda name: next((n for n in inventory if n.name == name), None)
    sources.metrics.side_effect = lambda: metrics
    sources.pods.side_effect = lambda: pods
    sources.quotas.side_effect = lambda: quotas_by_namespace

    with patch('server.dependencies.ClusterSources', return_value=sources):
        yield sources
