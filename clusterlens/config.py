import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Cluster registry (YAML); without it a single cluster on the current kube context is used
CLUSTERS_FILE = os.getenv("CLUSTERS_FILE")

PROMETHEUS_URL = os.getenv("PROMETHEUS_URL", "http://localhost:9090")
PROMETHEUS_TIMEOUT = float(os.getenv("PROMETHEUS_TIMEOUT", "10"))

WORKLOAD_NAMESPACE_PREFIX = os.getenv("WORKLOAD_NAMESPACE_PREFIX", "aip-")
GPU_RESOURCE_PREFIX = os.getenv("GPU_RESOURCE_PREFIX", "nvidia.com/")

QUOTA_GPU_RESOURCES = tuple(
    r.strip() for r in os.getenv(
        "QUOTA_GPU_RESOURCES",
        "nvidia.com/gpu,nvidia.com/mig-1g.5gb,nvidia.com/mig-2g.10gb,nvidia.com/mig-3g.20gb",
    ).split(",") if r.strip()
)

QUOTA_FETCH_WORKERS = int(os.getenv("QUOTA_FETCH_WORKERS", "8"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
