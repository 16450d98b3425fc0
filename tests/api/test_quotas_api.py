import pytest


def test_get_quotas(client, mock_sources):
    """测试获取命名空间配额API"""
    response = client.get("/api/v1/clusters/default/quotas")

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "live"
    assert data["total"] == 2

    training = data["items"][0]
    assert training["namespace"] == "aip-training"
    assert training["cpu"]["used"] == "52.0"
    assert training["cpu"]["limit"] == "80.0"
    assert training["cpu"]["unit"] == "cores"
    assert training["cpu"]["usedValue"] == 52.0
    assert training["cpu"]["usagePercentage"] == pytest.approx(65.0)
    assert training["gpu"]["nvidia.com/gpu"]["used"] == "2"


def test_get_quotas_baseline(client, mock_sources):
    mock_sources.quotas.side_effect = PermissionError("Permission denied for list namespaces")

    response = client.get("/api/v1/clusters/default/quotas")

    assert response.status_code == 200
    assert response.json()["source"] == "baseline"
    assert response.json()["total"] == 5


def test_get_quota_detail(client, mock_sources):
    response = client.get("/api/v1/clusters/default/quotas/aip-inference")

    assert response.status_code == 200
    assert response.json()["cpu"]["usagePercentage"] == 100.0
    assert response.json()["cpu"]["usedValue"] == 12.5


def test_get_quota_detail_failed_namespace(client, mock_sources):
    response = client.get("/api/v1/clusters/default/quotas/aip-research")

    assert response.status_code == 404
    assert response.json()["error"] == "Quota not found"
