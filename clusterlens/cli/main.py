import argparse
import logging
import sys

from clusterlens import DEFAULT_CLUSTER
from clusterlens import config
from clusterlens.cli.cluster import get_clusters_command
from clusterlens.cli.node import describe_node_command, get_node_pods_command, get_nodes_command
from clusterlens.cli.quota import describe_quota_command, get_quotas_command


def main():
    parser = argparse.ArgumentParser(description='Cluster Lens CLI')
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    cluster_parent = argparse.ArgumentParser(add_help=False)
    cluster_parent.add_argument('--cluster', default=DEFAULT_CLUSTER, help='Cluster id from the registry')

    # get命令
    get_parser = subparsers.add_parser('get', help='Get resource information')
    get_subparsers = get_parser.add_subparsers(dest='resource', help='Resource type')

    get_subparsers.add_parser('clusters', help='List clusters', parents=[cluster_parent])
    get_subparsers.add_parser('nodes', help='Node heatmap view', parents=[cluster_parent])
    get_subparsers.add_parser('quotas', help='Namespace quota summaries', parents=[cluster_parent])
    pods_parser = get_subparsers.add_parser('pods', help='GPU pods on a node', parents=[cluster_parent])
    pods_parser.add_argument('node_name', help='Node name')

    # describe命令
    describe_parser = subparsers.add_parser('describe', help='Describe a resource')
    describe_subparsers = describe_parser.add_subparsers(dest='resource', help='Resource type')

    describe_node_parser = describe_subparsers.add_parser('node', help='Node details', parents=[cluster_parent])
    describe_node_parser.add_argument('node_name', help='Node name')
    describe_quota_parser = describe_subparsers.add_parser('quota', help='Namespace quota details', parents=[cluster_parent])
    describe_quota_parser.add_argument('namespace', help='Namespace name')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'get' and args.resource == 'clusters':
            return get_clusters_command(args)
        elif args.command == 'get' and args.resource == 'nodes':
            return get_nodes_command(args)
        elif args.command == 'get' and args.resource == 'quotas':
            return get_quotas_command(args)
        elif args.command == 'get' and args.resource == 'pods':
            return get_node_pods_command(args)
        elif args.command == 'describe' and args.resource == 'node':
            return describe_node_command(args)
        elif args.command == 'describe' and args.resource == 'quota':
            return describe_quota_command(args)
        else:
            print(f"Unknown command: {args.command} {args.resource or ''}".rstrip())
            return 1

    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
