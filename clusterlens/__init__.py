DEFAULT_CLUSTER = "default"

__version__ = "0.1.0"
