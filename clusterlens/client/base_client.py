from kubernetes import client, config
from kubernetes.client.rest import ApiException
import json
import os
from typing import Optional


class KubernetesClient:
    """Kubernetes client base class, bound to one cluster"""

    def __init__(self, context: Optional[str] = None):
        self.context = context
        self.core_v1 = client.CoreV1Api(api_client=self._load_config())

    def _load_config(self) -> Optional[client.ApiClient]:
        """Load Kubernetes configuration; a dedicated ApiClient per kube context"""
        try:
            if os.getenv('KUBERNETES_SERVICE_HOST') and not self.context:
                config.load_incluster_config()
                return None
            return config.new_client_from_config(context=self.context)
        except Exception as e:
            raise RuntimeError(f"Failed to load Kubernetes config: {e}")

    @staticmethod
    def _api_message(e: ApiException, default: str) -> str:
        """Extract the detailed message from a Kubernetes API error body"""
        try:
            return json.loads(e.body).get("message", default)
        except (TypeError, ValueError, AttributeError):
            return default

    def handle_api_exception(self, e: ApiException, operation: str) -> None:
        """Handle API exception"""
        if e.status == 401:
            raise PermissionError(f"Authentication failed for {operation}")
        elif e.status == 403:
            raise PermissionError(f"Permission denied for {operation}")
        elif e.status == 404:
            detailed_msg = self._api_message(e, f"{e.body}")
            raise FileNotFoundError(f"Resource not found for {operation}: {detailed_msg}")
        else:
            detailed_msg = self._api_message(e, str(e))
            raise RuntimeError(f"Kubernetes API error during {operation}: {detailed_msg}")
