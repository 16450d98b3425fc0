import yaml
from typing import List, Optional
from pydantic import ValidationError

from clusterlens import DEFAULT_CLUSTER
from clusterlens import config
from clusterlens.api.cluster import Cluster, ClusterConfig

CLUSTERS_KIND = "clusters"


class ParserError(Exception):
    """Parser error exception"""
    pass


class ClusterParser:
    """Cluster registry parser"""

    @classmethod
    def parse_yaml(cls, yaml_content: str) -> ClusterConfig:
        """Parse YAML content into a cluster registry"""
        try:
            data = yaml.safe_load(yaml_content)
            if not isinstance(data, dict) or 'kind' not in data:
                raise ParserError("Invalid YAML: missing 'kind' field")

            if data['kind'] != CLUSTERS_KIND:
                raise ParserError(f"Unsupported kind: {data['kind']}")

            return ClusterConfig(**data)

        except yaml.YAMLError as e:
            raise ParserError(f"YAML parsing error: {e}")
        except ValidationError as e:
            raise ParserError(f"Validation error: {e}")

    @classmethod
    def validate_clusters(cls, cluster_config: ClusterConfig) -> None:
        """Validate cluster registry"""
        if not cluster_config.clusters:
            raise ParserError("At least one cluster must be defined in clusters")

        seen = set()
        for cluster in cluster_config.clusters:
            if cluster.id in seen:
                raise ParserError(f"Duplicate cluster id: {cluster.id}")
            seen.add(cluster.id)

    @classmethod
    def parse_and_validate(cls, yaml_content: str) -> ClusterConfig:
        """Parse and validate cluster registry"""
        cluster_config = cls.parse_yaml(yaml_content)
        cls.validate_clusters(cluster_config)
        return cluster_config

    @classmethod
    def load_clusters(cls, file_path: Optional[str] = None) -> List[Cluster]:
        """Load the registry from file, or a single cluster on the current kube context"""
        file_path = file_path or config.CLUSTERS_FILE
        if not file_path:
            return [Cluster(id=DEFAULT_CLUSTER, name=DEFAULT_CLUSTER)]

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ParserError(f"File not found: {file_path}")
        except IOError as e:
            raise ParserError(f"File reading error: {e}")

        return cls.parse_and_validate(content).clusters

    @classmethod
    def find_cluster(cls, cluster_id: str, file_path: Optional[str] = None) -> Optional[Cluster]:
        """Look up one cluster by id"""
        for cluster in cls.load_clusters(file_path):
            if cluster.id == cluster_id:
                return cluster
        return None
