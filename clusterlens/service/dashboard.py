"""
The dashboard operations, with failure containment.

Sources are zero-argument callables so the same pipeline runs against live
clients, the fixed baseline or test doubles. Nothing here raises on an
upstream failure: the node view and quota view fall back to the baseline,
per-namespace quota failures drop only that namespace, and pod attribution
degrades to an empty list.
"""

import logging
from typing import Callable, Dict, List, Optional

from clusterlens.api.node import (
    NodeInventory,
    NodeMetric,
    NodeMetricResult,
    NodeViewResult,
    PodGpuUsage,
    PodSpec,
)
from clusterlens.api.quota import NamespaceQuotaResult, QuotaObject
from clusterlens.constants import DataSource
from clusterlens.mapper.node_mapper import build_node_view, find_metric, reconcile
from clusterlens.mapper.pod_mapper import attribute_gpu_pods, attribute_gpu_pods_by_node
from clusterlens.mapper.quota_mapper import aggregate_namespace_quotas
from clusterlens.service.baseline import BASELINE_METRICS, baseline_namespace_quotas, baseline_node_views

logger = logging.getLogger(__name__)

InventorySource = Callable[[], List[NodeInventory]]
NodeInventorySource = Callable[[str], Optional[NodeInventory]]
MetricSource = Callable[[], List[NodeMetric]]
PodSource = Callable[[], List[PodSpec]]
QuotaSource = Callable[[], Dict[str, Optional[List[QuotaObject]]]]


def _list_pods(pod_source: PodSource) -> Optional[List[PodSpec]]:
    try:
        return pod_source()
    except Exception as e:
        logger.warning(f"Pod listing unavailable, skipping GPU pod attribution: {e}")
        return None


def get_node_view(inventory_source: InventorySource, metric_source: MetricSource,
                  pod_source: Optional[PodSource] = None) -> NodeViewResult:
    """Reconciled per-node view; the whole view falls back to the baseline on failure"""
    try:
        inventory = inventory_source()
        metrics = metric_source()
    except Exception as e:
        logger.error(f"Live node data unavailable, serving baseline: {e}")
        return NodeViewResult(source=DataSource.BASELINE, items=baseline_node_views())

    views = reconcile(inventory, metrics)

    pods = _list_pods(pod_source) if pod_source is not None else None
    if pods is not None:
        pods_by_node = attribute_gpu_pods_by_node(pods, [view.name for view in views])
        views = [view.model_copy(update={"pods": pods_by_node[view.name]}) for view in views]

    return NodeViewResult(source=DataSource.LIVE, items=views)


def get_node_detail(node_source: NodeInventorySource, metric_source: MetricSource, node_name: str,
                    pod_source: Optional[PodSource] = None) -> NodeViewResult:
    """
    View of a single node, holding one item or none when the node does not exist.

    Only that node is read from the inventory source; on failure the matching
    baseline node is served instead.
    """
    try:
        node = node_source(node_name)
        metrics = metric_source() if node is not None else []
    except Exception as e:
        logger.error(f"Live data for node {node_name} unavailable, serving baseline: {e}")
        views = [view for view in baseline_node_views() if view.name == node_name]
        return NodeViewResult(source=DataSource.BASELINE, items=views)

    if node is None:
        return NodeViewResult(source=DataSource.LIVE, items=[])

    view = build_node_view(node, find_metric(node_name, metrics))
    pods = _list_pods(pod_source) if pod_source is not None else None
    if pods is not None:
        view = view.model_copy(update={"pods": attribute_gpu_pods(pods, node_name)})

    return NodeViewResult(source=DataSource.LIVE, items=[view])


def get_node_metrics(metric_source: MetricSource) -> NodeMetricResult:
    """Raw per-node metric records"""
    try:
        return NodeMetricResult(source=DataSource.LIVE, items=metric_source())
    except Exception as e:
        logger.error(f"Live metrics unavailable, serving baseline: {e}")
        return NodeMetricResult(
            source=DataSource.BASELINE,
            items=[metric.model_copy(deep=True) for metric in BASELINE_METRICS],
        )


def get_namespace_quotas(quota_source: QuotaSource) -> NamespaceQuotaResult:
    """One quota summary per namespace; failed namespaces are dropped"""
    try:
        quotas_by_namespace = quota_source()
    except Exception as e:
        logger.error(f"Live quota data unavailable, serving baseline: {e}")
        return NamespaceQuotaResult(source=DataSource.BASELINE, items=baseline_namespace_quotas())

    return NamespaceQuotaResult(
        source=DataSource.LIVE,
        items=aggregate_namespace_quotas(quotas_by_namespace),
    )


def get_gpu_pod_attribution(pod_source: PodSource, node_name: str) -> List[PodGpuUsage]:
    """Workload pods holding GPUs on one node"""
    pods = _list_pods(pod_source)
    if pods is None:
        return []
    return attribute_gpu_pods(pods, node_name)
