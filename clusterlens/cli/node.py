from clusterlens.cli.cluster import resolve_cluster
from clusterlens.service.dashboard import get_gpu_pod_attribution, get_node_detail, get_node_view
from clusterlens.service.sources import ClusterSources


def _percent(value):
    return f"{value:.1f}%" if value is not None else "N/A"


def _print_baseline_notice(result):
    if result.is_baseline:
        print("⚠️  Live data unavailable, showing baseline data")


def get_nodes_command(args):
    """获取节点列表命令"""
    try:
        sources = ClusterSources(resolve_cluster(args.cluster))
        result = get_node_view(sources.inventory, sources.metrics, sources.pods)
        _print_baseline_notice(result)

        print(f"{'NODE NAME':<30} {'STATUS':<15} {'CPU':<10} {'MEMORY':<10} {'GPU':<10} {'GPU PROFILES':<40}")
        for view in result.items:
            status = "Unschedulable" if view.unschedulable else "Ready"
            profiles = ', '.join(key.replace('nvidia.com/', '') for key in view.gpus) or '-'
            print(f"{view.name:<30} {status:<15} {_percent(view.cpu_usage_percentage):<10} "
                  f"{_percent(view.memory_usage_percentage):<10} {_percent(view.gpu_usage_percentage):<10} "
                  f"{profiles:<40}")

        return 0
    except Exception as e:
        print(f"❌ Error getting nodes: {e}")
        return 1


def describe_node_command(args):
    """查看节点详情命令"""
    try:
        sources = ClusterSources(resolve_cluster(args.cluster))
        result = get_node_detail(sources.node_inventory, sources.metrics, args.node_name, sources.pods)

        if not result.items:
            print(f"❌ Node not found: {args.node_name}")
            return 1

        view = result.items[0]
        _print_baseline_notice(result)
        print(f"🖥️  Node: {view.name}")
        print(f"   Schedulable: {'No' if view.unschedulable else 'Yes'}")
        for label, stat in (("CPU", view.cpu), ("Memory", view.memory)):
            print(f"   {label}: capacity={stat.capacity} allocatable={stat.allocatable} "
                  f"usage={stat.usage} ({_percent(stat.usage_percentage)})")

        if view.gpus:
            print(f"   GPU: {_percent(view.gpu_usage_percentage)}")
            for key, gpu in view.gpus.items():
                print(f"     {key.replace('nvidia.com/', '')}: capacity={gpu.capacity} "
                      f"allocatable={gpu.allocatable} usage={gpu.usage} ({_percent(gpu.usage_percentage)})")
        else:
            print("   GPU: No GPU or MIG devices found")

        if view.pods:
            print(f"   GPU pods:")
            for pod in view.pods:
                print(f"     {pod.namespace}/{pod.name}: {pod.gpu_count}")

        return 0
    except Exception as e:
        print(f"❌ Error describing node: {e}")
        return 1


def get_node_pods_command(args):
    """获取节点上占用GPU的工作负载Pod"""
    try:
        sources = ClusterSources(resolve_cluster(args.cluster))
        pods = get_gpu_pod_attribution(sources.pods, args.node_name)

        if not pods:
            print(f"No GPU pods found on node {args.node_name}")
            return 0

        print(f"{'NAMESPACE':<25} {'POD NAME':<45} {'GPUS':<6}")
        for pod in pods:
            print(f"{pod.namespace:<25} {pod.name:<45} {pod.gpu_count:<6}")

        return 0
    except Exception as e:
        print(f"❌ Error getting pods: {e}")
        return 1
