from clusterlens.api.cluster import Cluster
from clusterlens.parser.cluster_parser import ClusterParser, ParserError


def resolve_cluster(cluster_id: str) -> Cluster:
    """Look up a cluster by id, raising ValueError for unknown ids"""
    cluster = ClusterParser.find_cluster(cluster_id)
    if cluster is None:
        raise ValueError(f"Cluster not found: {cluster_id}")
    return cluster


def get_clusters_command(args):
    """获取集群列表命令"""
    try:
        clusters = ClusterParser.load_clusters()

        print(f"{'ID':<20} {'NAME':<30} {'CONTEXT':<25} {'PROMETHEUS':<40}")
        for cluster in clusters:
            context = cluster.context or '-'
            prometheus = cluster.prometheus_url or 'default'
            print(f"{cluster.id:<20} {cluster.name:<30} {context:<25} {prometheus:<40}")

        return 0
    except ParserError as e:
        print(f"❌ Parser error: {e}")
        return 1
    except Exception as e:
        print(f"❌ Error getting clusters: {e}")
        return 1
