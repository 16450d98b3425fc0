"""
KubernetesClient：配置加载与 API 异常映射
"""
import json
import pytest
from unittest.mock import MagicMock, patch
from kubernetes.client.rest import ApiException


@patch('clusterlens.client.base_client.KubernetesClient.__init__', return_value=None)
def test_handle_api_exception_404_returns_detailed_message(mock_init):
    """404 异常应返回 JSON body 中的 message"""
    from clusterlens.client.base_client import KubernetesClient

    client = KubernetesClient.__new__(KubernetesClient)

    error_detail = {"message": "nodes 'missing-node' not found", "reason": "NotFound"}
    mock_exc = MagicMock(spec=ApiException)
    mock_exc.status = 404
    mock_exc.body = json.dumps(error_detail)

    with pytest.raises(FileNotFoundError) as exc_info:
        client.handle_api_exception(mock_exc, "get node")

    assert "missing-node" in str(exc_info.value)
    assert "get node" in str(exc_info.value)


@patch('clusterlens.client.base_client.KubernetesClient.__init__', return_value=None)
def test_handle_api_exception_404_non_json_body(mock_init):
    """404 body 非合法 JSON 时仍返回 FileNotFoundError"""
    from clusterlens.client.base_client import KubernetesClient

    client = KubernetesClient.__new__(KubernetesClient)

    mock_exc = MagicMock(spec=ApiException)
    mock_exc.status = 404
    mock_exc.body = "plain text error"

    with pytest.raises(FileNotFoundError) as exc_info:
        client.handle_api_exception(mock_exc, "list quotas in aip-training")

    assert "list quotas in aip-training" in str(exc_info.value)


@patch('clusterlens.client.base_client.KubernetesClient.__init__', return_value=None)
def test_handle_api_exception_500_returns_detailed_message(mock_init):
    from clusterlens.client.base_client import KubernetesClient

    client = KubernetesClient.__new__(KubernetesClient)

    mock_exc = MagicMock(spec=ApiException)
    mock_exc.status = 500
    mock_exc.body = json.dumps({"message": "etcd cluster is unavailable"})

    with pytest.raises(RuntimeError) as exc_info:
        client.handle_api_exception(mock_exc, "list pods")

    assert "etcd cluster is unavailable" in str(exc_info.value)


@pytest.mark.parametrize("status,message", [
    (401, "Authentication failed"),
    (403, "Permission denied"),
])
@patch('clusterlens.client.base_client.KubernetesClient.__init__', return_value=None)
def test_handle_api_exception_auth(mock_init, status, message):
    from clusterlens.client.base_client import KubernetesClient

    client = KubernetesClient.__new__(KubernetesClient)
    mock_exc = MagicMock(spec=ApiException)
    mock_exc.status = status

    with pytest.raises(PermissionError) as exc_info:
        client.handle_api_exception(mock_exc, "list nodes")

    assert message in str(exc_info.value)


@patch('clusterlens.client.base_client.client.CoreV1Api')
@patch('clusterlens.client.base_client.config.new_client_from_config')
def test_client_bound_to_context(mock_new_client, mock_core_v1, monkeypatch):
    """每个集群使用自己 kube context 的 ApiClient"""
    from clusterlens.client.base_client import KubernetesClient

    monkeypatch.delenv('KUBERNETES_SERVICE_HOST', raising=False)
    api_client = MagicMock()
    mock_new_client.return_value = api_client

    KubernetesClient(context="prod-admin")

    mock_new_client.assert_called_once_with(context="prod-admin")
    mock_core_v1.assert_called_once_with(api_client=api_client)


@patch('clusterlens.client.base_client.client.CoreV1Api')
@patch('clusterlens.client.base_client.config.load_incluster_config')
def test_client_in_cluster(mock_incluster, mock_core_v1, monkeypatch):
    from clusterlens.client.base_client import KubernetesClient

    monkeypatch.setenv('KUBERNETES_SERVICE_HOST', '10.0.0.1')

    KubernetesClient()

    mock_incluster.assert_called_once()
    mock_core_v1.assert_called_once_with(api_client=None)


@patch('clusterlens.client.base_client.config.new_client_from_config',
       side_effect=Exception("Invalid kube-config file"))
def test_client_config_failure(mock_new_client, monkeypatch):
    from clusterlens.client.base_client import KubernetesClient

    monkeypatch.delenv('KUBERNETES_SERVICE_HOST', raising=False)

    with pytest.raises(RuntimeError, match="Failed to load Kubernetes config"):
        KubernetesClient()
