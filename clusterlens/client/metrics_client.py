import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests

from clusterlens import config
from clusterlens.api.node import GpuMetric, NodeMetric
from clusterlens.constants import GENERIC_GPU_RESOURCE, PromQueries

logger = logging.getLogger(__name__)


class MetricsClient:
    """Per-node usage percentages from the Prometheus HTTP API"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.PROMETHEUS_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.PROMETHEUS_TIMEOUT

    def query(self, promql: str) -> List[Dict[str, Any]]:
        """Run an instant query, raising RuntimeError when Prometheus does not answer it"""
        try:
            response = requests.get(
                f"{self.base_url}/api/v1/query",
                params={"query": promql},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RuntimeError(f"Prometheus request failed for {promql[:80]}: {e}")

        if response.status_code != 200:
            raise RuntimeError(f"Prometheus query failed with status {response.status_code}: {promql[:80]}")

        try:
            data = response.json()
        except ValueError:
            raise RuntimeError(f"Prometheus returned a non-JSON body for: {promql[:80]}")

        if data.get("status") != "success":
            raise RuntimeError(f"Prometheus query was not successful for: {promql[:80]}")
        return data.get("data", {}).get("result", [])

    def list_node_metrics(self) -> List[NodeMetric]:
        """
        Query CPU, memory and GPU utilisation and fold them into one record per node.

        A single failed query only contributes no samples; when all three fail
        Prometheus is unavailable and RuntimeError is raised.
        """
        queries = (PromQueries.CPU, PromQueries.MEMORY, PromQueries.GPU)
        with ThreadPoolExecutor(max_workers=len(queries)) as executor:
            futures = [executor.submit(self.query, promql) for promql in queries]

        samples = []
        errors = []
        for future in futures:
            try:
                samples.append(future.result())
            except RuntimeError as e:
                logger.warning(str(e))
                errors.append(e)
                samples.append([])

        if len(errors) == len(queries):
            raise RuntimeError(f"Prometheus unavailable at {self.base_url}: {errors[0]}")

        return build_node_metrics(*samples)


def node_name_from_sample(sample: Dict[str, Any]) -> str:
    """'10.0.0.5:9100' -> '10.0.0.5'"""
    return sample.get("metric", {}).get("instance", "").split(":")[0]


def gpu_resource_key(sample: Dict[str, Any]) -> str:
    mig_profile = sample.get("metric", {}).get("mig_profile")
    if mig_profile:
        return f"nvidia.com/{mig_profile}"
    return GENERIC_GPU_RESOURCE


def sample_value(sample: Dict[str, Any]) -> Optional[float]:
    try:
        return float(sample.get("value", [None, None])[1])
    except (ValueError, IndexError, TypeError):
        return None


def build_node_metrics(cpu_samples: List[Dict[str, Any]],
                       memory_samples: List[Dict[str, Any]],
                       gpu_samples: List[Dict[str, Any]]) -> List[NodeMetric]:
    """
    Fold raw instant-query samples into NodeMetric records.

    Several GPU samples for the same resource key on a node are averaged; a
    node's overall GPU percentage is the mean of its per-key values.
    """
    records: Dict[str, Dict[str, Any]] = {}

    def record_for(node_name: str) -> Dict[str, Any]:
        return records.setdefault(node_name, {"node": node_name, "gpus": {}})

    for sample in cpu_samples:
        value = sample_value(sample)
        if value is not None:
            record_for(node_name_from_sample(sample))["cpu_usage_percentage"] = value

    for sample in memory_samples:
        value = sample_value(sample)
        if value is not None:
            record_for(node_name_from_sample(sample))["memory_usage_percentage"] = value

    gpu_totals: Dict[str, Dict[str, List[float]]] = {}
    for sample in gpu_samples:
        value = sample_value(sample)
        if value is None:
            continue
        node_name = node_name_from_sample(sample)
        record_for(node_name)
        gpu_totals.setdefault(node_name, {}).setdefault(gpu_resource_key(sample), []).append(value)

    metrics = []
    for node_name, record in records.items():
        gpus = {
            key: GpuMetric(usage_percentage=sum(values) / len(values))
            for key, values in gpu_totals.get(node_name, {}).items()
        }
        overall = sum(g.usage_percentage for g in gpus.values()) / len(gpus) if gpus else 0.0
        metrics.append(NodeMetric(
            node=node_name,
            cpu_usage_percentage=record.get("cpu_usage_percentage"),
            memory_usage_percentage=record.get("memory_usage_percentage"),
            gpu_usage_percentage=overall,
            gpus=gpus,
        ))

    return metrics
