from .base_client import KubernetesClient
from kubernetes.client.rest import ApiException
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional
import logging

from clusterlens import config
from clusterlens.api.quota import QuotaObject
from clusterlens.mapper.filters import is_workload_namespace

logger = logging.getLogger(__name__)


class QuotaClient(KubernetesClient):
    """Resource quota listing client"""

    def list_workload_namespaces(self) -> List[str]:
        """List namespaces that belong to workload tenants"""
        try:
            namespaces = self.core_v1.list_namespace()
            return [
                ns.metadata.name for ns in namespaces.items
                if is_workload_namespace(ns.metadata.name)
            ]
        except ApiException as e:
            self.handle_api_exception(e, "list namespaces")

    def list_quota_objects(self, namespace: str) -> List[QuotaObject]:
        """List every ResourceQuota in a namespace"""
        try:
            quota_list = self.core_v1.list_namespaced_resource_quota(namespace)
            return [self._build_quota_object(quota, namespace) for quota in quota_list.items]
        except ApiException as e:
            self.handle_api_exception(e, f"list quotas in {namespace}")

    def fetch_namespace_quotas(self, namespaces: Optional[List[str]] = None) -> Dict[str, Optional[List[QuotaObject]]]:
        """
        List quotas of many namespaces concurrently.

        A namespace whose listing fails maps to None; listing the namespaces
        themselves failing propagates to the caller.
        """
        if namespaces is None:
            namespaces = self.list_workload_namespaces()
        if not namespaces:
            return {}

        results: Dict[str, Optional[List[QuotaObject]]] = {}
        with ThreadPoolExecutor(max_workers=config.QUOTA_FETCH_WORKERS) as executor:
            futures = {ns: executor.submit(self.list_quota_objects, ns) for ns in namespaces}
            for namespace, future in futures.items():
                try:
                    results[namespace] = future.result()
                except Exception as e:
                    logger.warning(f"Failed to list quotas in namespace {namespace}: {e}")
                    results[namespace] = None

        return results

    def _build_quota_object(self, quota: Any, namespace: str) -> QuotaObject:
        """Build quota object from a V1ResourceQuota"""
        hard = {}
        if quota.spec and quota.spec.hard:
            hard = dict(quota.spec.hard)

        used = {}
        if quota.status and quota.status.used:
            used = dict(quota.status.used)

        return QuotaObject(
            name=quota.metadata.name,
            namespace=namespace,
            hard=hard,
            used=used,
        )
