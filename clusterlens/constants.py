"""
Centralised constants for the clusterlens project.

Every magic string that appears in more than one module should live here.
Import from this module instead of sprinkling literals across the codebase.
"""

from enum import Enum


# ── Quantity suffixes ────────────────────────────────────────────────────────

MILLI_SUFFIX = "m"

BINARY_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024 ** 2),
    ("Gi", 1024 ** 3),
    ("Ti", 1024 ** 4),
)

GI = 1024 ** 3


# ── Quota resource keys ──────────────────────────────────────────────────────

class QuotaKeys:
    CPU     = "limits.cpu"
    MEMORY  = "limits.memory"
    STORAGE = "requests.storage"


class Units:
    CORES   = "cores"
    GI      = "Gi"
    DEVICES = "devices"


# ── Node resource keys ───────────────────────────────────────────────────────

class NodeResources:
    CPU    = "cpu"
    MEMORY = "memory"


# Pod phases that still hold resources on their node.
ACTIVE_POD_PHASES: tuple[str, ...] = ("Running", "Pending")


# ── Sentinels ────────────────────────────────────────────────────────────────

# Marker for inventory fields that only the metrics source knows about.
UNKNOWN = "N/A"


# ── Data source of a result ──────────────────────────────────────────────────

class DataSource(str, Enum):
    LIVE = "live"
    BASELINE = "baseline"


# ── Prometheus ───────────────────────────────────────────────────────────────

class PromQueries:
    CPU = '100 - (avg by (instance) (rate(node_cpu_seconds_total{mode="idle"}[5m])) * 100)'
    MEMORY = ('(node_memory_MemTotal_bytes - node_memory_MemAvailable_bytes) '
              '/ node_memory_MemTotal_bytes * 100')
    GPU = 'avg by (instance, gpu, mig_profile) (dcgm_gpu_utilization)'


GENERIC_GPU_RESOURCE = "nvidia.com/gpu"
