from clusterlens.cli.cluster import resolve_cluster
from clusterlens.service.dashboard import get_namespace_quotas
from clusterlens.service.sources import ClusterSources


def _format_stat(stat):
    return f"{stat.used}/{stat.limit} {stat.unit} ({stat.usage_percentage:.0f}%)"


def get_quotas_command(args):
    """Get namespace quota summaries"""
    try:
        sources = ClusterSources(resolve_cluster(args.cluster))
        result = get_namespace_quotas(sources.quotas)

        if result.is_baseline:
            print("⚠️  Live data unavailable, showing baseline data")

        if not result.items:
            print("No quotas found")
            return 0

        print(f"{'NAMESPACE':<20} {'CPU':<28} {'MEMORY':<30} {'STORAGE':<30} {'GPU':<20}")
        for quota in result.items:
            gpu_used = sum(stat.used_value for stat in quota.gpu.values())
            gpu_limit = sum(stat.limit_value for stat in quota.gpu.values())
            gpu = f"{gpu_used:g}/{gpu_limit:g}" if quota.gpu else "-"
            print(f"{quota.namespace:<20} {_format_stat(quota.cpu):<28} {_format_stat(quota.memory):<30} "
                  f"{_format_stat(quota.storage):<30} {gpu:<20}")

        return 0
    except Exception as e:
        print(f"❌ Error getting quotas: {e}")
        return 1


def describe_quota_command(args):
    """Describe one namespace quota summary"""
    try:
        sources = ClusterSources(resolve_cluster(args.cluster))
        result = get_namespace_quotas(sources.quotas)

        quota = next((q for q in result.items if q.namespace == args.namespace), None)
        if quota is None:
            print(f"❌ Quota not found for namespace: {args.namespace}")
            return 1

        if result.is_baseline:
            print("⚠️  Live data unavailable, showing baseline data")

        print(f"📦 Namespace: {quota.namespace}")
        print(f"   CPU: {_format_stat(quota.cpu)}")
        print(f"   Memory: {_format_stat(quota.memory)}")
        print(f"   Storage: {_format_stat(quota.storage)}")
        for key, stat in quota.gpu.items():
            print(f"   {key.replace('nvidia.com/', '')}: {_format_stat(stat)}")

        return 0
    except Exception as e:
        print(f"❌ Error describing quota: {e}")
        return 1
