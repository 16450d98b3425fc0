import pytest

from clusterlens.api.quota import QuotaObject
from clusterlens.constants import GI
from clusterlens.mapper.quota_mapper import (
    aggregate_gpu,
    aggregate_namespace_quotas,
    aggregate_quota,
    group_by_namespace,
)


def test_aggregate_quota_sums_across_objects(quotas_by_namespace):
    """同一命名空间多个配额对象累加而不是覆盖"""
    summary = aggregate_quota(quotas_by_namespace["aip-training"])

    assert summary.namespace == "aip-training"
    assert summary.cpu.used_value == 52.0
    assert summary.cpu.limit_value == 80.0
    assert summary.cpu.used == "52.0"
    assert summary.cpu.limit == "80.0"
    assert summary.cpu.unit == "cores"
    assert summary.cpu.usage_percentage == pytest.approx(65.0)


def test_aggregate_quota_memory_and_storage(quotas_by_namespace):
    summary = aggregate_quota(quotas_by_namespace["aip-training"])

    assert summary.memory.used == "200.0Gi"
    assert summary.memory.limit == "256.0Gi"
    assert summary.memory.unit == "Gi"
    assert summary.storage.used_value == 512 * GI
    assert summary.storage.limit == "1024.0Gi"
    assert summary.storage.usage_percentage == pytest.approx(50.0)


def test_aggregate_quota_gpu_keys(quotas_by_namespace):
    summary = aggregate_quota(quotas_by_namespace["aip-training"])

    assert set(summary.gpu) == {"nvidia.com/mig-1g.5gb", "nvidia.com/gpu"}
    mig = summary.gpu["nvidia.com/mig-1g.5gb"]
    assert mig.used == "3"
    assert mig.limit == "4"
    assert mig.unit == "devices"
    assert mig.usage_percentage == pytest.approx(75.0)


def test_aggregate_quota_drops_unlisted_custom_resources(quotas_by_namespace):
    summary = aggregate_quota(quotas_by_namespace["aip-inference"])

    assert summary.gpu == {}


def test_aggregate_quota_over_limit_not_clamped(quotas_by_namespace):
    summary = aggregate_quota(quotas_by_namespace["aip-inference"])

    assert summary.cpu.used_value == 12.5
    assert summary.cpu.limit_value == 10.0
    assert summary.cpu.used == "12.5"
    assert summary.cpu.usage_percentage == 100.0


def test_aggregate_quota_missing_keys_are_zero(quotas_by_namespace):
    summary = aggregate_quota(quotas_by_namespace["aip-inference"])

    assert summary.storage.used_value == 0.0
    assert summary.storage.usage_percentage == 0.0


def test_aggregate_quota_zero_limit():
    summary = aggregate_quota([QuotaObject(namespace="aip-x", used={"limits.cpu": "2"})])

    assert summary.cpu.limit_value == 0.0
    assert summary.cpu.usage_percentage == 0.0


def test_aggregate_quota_empty():
    assert aggregate_quota([]) is None


def test_aggregate_gpu_custom_targets():
    quota = QuotaObject(namespace="aip-x", hard={"requests.example.com/fpga": "2"},
                        used={"requests.example.com/fpga": "1"})

    result = aggregate_gpu([quota], targets=["example.com/fpga"])

    assert result["example.com/fpga"].usage_percentage == pytest.approx(50.0)


def test_aggregate_namespace_quotas_isolates_failures(quotas_by_namespace):
    result = aggregate_namespace_quotas(quotas_by_namespace)

    assert [q.namespace for q in result] == ["aip-training", "aip-inference"]


def test_group_by_namespace(quotas_by_namespace):
    flat = quotas_by_namespace["aip-training"] + quotas_by_namespace["aip-inference"]

    grouped = group_by_namespace(flat)

    assert len(grouped["aip-training"]) == 2
    assert len(grouped["aip-inference"]) == 1


def test_aggregate_quota_two_objects_sum_limit():
    summary = aggregate_quota([
        QuotaObject(namespace="aip-a", hard={"limits.cpu": "10"}),
        QuotaObject(namespace="aip-a", hard={"limits.cpu": "5"}),
    ])

    assert summary.cpu.limit_value == 15.0
    assert summary.cpu.limit == "15.0"


def test_aggregate_gpu_keyed_by_resource_name():
    """配额键按资源名汇总，与节点视图的GPU键一致"""
    quotas = [
        QuotaObject(namespace="aip-a", hard={"requests.nvidia.com/mig-1g.5gb": "2"},
                    used={"requests.nvidia.com/mig-1g.5gb": "1"}),
        QuotaObject(namespace="aip-a", hard={"requests.nvidia.com/mig-1g.5gb": "2"}),
    ]

    result = aggregate_gpu(quotas)

    assert list(result) == ["nvidia.com/mig-1g.5gb"]
    assert result["nvidia.com/mig-1g.5gb"].limit == "4"
    assert result["nvidia.com/mig-1g.5gb"].used == "1"
