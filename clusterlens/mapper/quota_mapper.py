import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from clusterlens.api.quota import NamespaceQuota, QuotaObject, QuotaStat
from clusterlens.constants import QuotaKeys, Units
from clusterlens.mapper.filters import match_quota_gpu_resource
from clusterlens.parser.quantity_parser import (
    format_bytes,
    format_cores,
    format_count,
    parse_quantity,
    usage_percentage,
)

logger = logging.getLogger(__name__)


def _sum_key(quota_objects: Iterable[QuotaObject], key: str) -> Dict[str, float]:
    """Additive used/limit for one resource key; missing keys count as zero"""
    used = 0.0
    limit = 0.0
    for quota in quota_objects:
        used += parse_quantity(quota.used.get(key))
        limit += parse_quantity(quota.hard.get(key))
    return {"used": used, "limit": limit}


def build_quota_stat(used: float, limit: float, unit: str,
                     formatter: Callable[[float], str]) -> QuotaStat:
    return QuotaStat(
        used=formatter(used),
        limit=formatter(limit),
        unit=unit,
        used_value=used,
        limit_value=limit,
        usage_percentage=usage_percentage(used, limit),
    )


def aggregate_gpu(quota_objects: Sequence[QuotaObject],
                  targets: Optional[Sequence[str]] = None) -> Dict[str, QuotaStat]:
    """
    Sum allow-listed GPU keys across quota objects, keyed by resource name.

    'requests.nvidia.com/gpu' is reported under 'nvidia.com/gpu'; other custom
    resources are dropped.
    """
    totals: Dict[str, Dict[str, float]] = defaultdict(lambda: {"used": 0.0, "limit": 0.0})

    for quota in quota_objects:
        for key, amount in quota.hard.items():
            resource = match_quota_gpu_resource(key, targets)
            if resource:
                totals[resource]["limit"] += parse_quantity(amount)
        for key, amount in quota.used.items():
            resource = match_quota_gpu_resource(key, targets)
            if resource:
                totals[resource]["used"] += parse_quantity(amount)

    return {
        key: build_quota_stat(total["used"], total["limit"], Units.DEVICES, format_count)
        for key, total in totals.items()
    }


def aggregate_quota(quota_objects: Sequence[QuotaObject],
                    targets: Optional[Sequence[str]] = None) -> Optional[NamespaceQuota]:
    """
    Collapse every quota object of one namespace into a single summary.

    Used and limit are summed across objects, never overwritten. Returns None
    when there is nothing to aggregate so callers can report "no data".
    """
    if not quota_objects:
        return None

    namespace = quota_objects[0].namespace
    cpu = _sum_key(quota_objects, QuotaKeys.CPU)
    memory = _sum_key(quota_objects, QuotaKeys.MEMORY)
    storage = _sum_key(quota_objects, QuotaKeys.STORAGE)

    return NamespaceQuota(
        namespace=namespace,
        cpu=build_quota_stat(cpu["used"], cpu["limit"], Units.CORES, format_cores),
        memory=build_quota_stat(memory["used"], memory["limit"], Units.GI, format_bytes),
        storage=build_quota_stat(storage["used"], storage["limit"], Units.GI, format_bytes),
        gpu=aggregate_gpu(quota_objects, targets),
    )


def group_by_namespace(quota_objects: Iterable[QuotaObject]) -> Dict[str, List[QuotaObject]]:
    grouped: Dict[str, List[QuotaObject]] = {}
    for quota in quota_objects:
        grouped.setdefault(quota.namespace, []).append(quota)
    return grouped


def aggregate_namespace_quotas(quotas_by_namespace: Dict[str, Optional[List[QuotaObject]]],
                               targets: Optional[Sequence[str]] = None) -> List[NamespaceQuota]:
    """
    Aggregate each namespace independently.

    A namespace mapped to None (its listing failed) or to no quota objects is
    left out of the result; the others are still aggregated.
    """
    result = []
    for namespace, quota_objects in quotas_by_namespace.items():
        if quota_objects is None:
            logger.warning(f"Dropping namespace {namespace}: quota listing failed")
            continue

        summary = aggregate_quota(quota_objects, targets)
        if summary is None:
            logger.debug(f"No quota objects in namespace {namespace}")
            continue
        result.append(summary)

    return result
