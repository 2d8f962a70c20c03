"""Conversion constants: classification table, defaults, caps, well-known keys."""

# Env var name prefixes (case-insensitive) routed to a Secret instead of a ConfigMap.
# Best-effort heuristic, not a confidentiality guarantee.
SECRET_PREFIXES = (
    "AWS", "SECRET", "PASSWORD", "TOKEN", "KEY",
    "PRIVATE", "ACCESS", "AUTH", "CERT",
)

# ECS CPU units map 1:1 to millicores
DEFAULT_CPU = "100m"
MAX_CPU_UNITS = 16000

# ECS memory is in MB, mapped to MiB
DEFAULT_MEMORY = "128Mi"
MAX_MEMORY_MB = 262144
MAX_MEMORY = "256Gi"

MIN_PORT = 1
MAX_PORT = 65535

DEFAULT_NAMESPACE = "default"
DEFAULT_REPLICAS = 1
DEFAULT_SERVICE_TYPE = "ClusterIP"
SERVICE_TYPES = ("ClusterIP", "NodePort", "LoadBalancer")

# IRSA: binds an IAM role to a ServiceAccount
IRSA_ANNOTATION = "eks.amazonaws.com/role-arn"

MANAGED_BY = "ecs2k8s"

# Kustomize overlay name -> namespace
DEFAULT_OVERLAYS = {
    "dev": "development",
    "staging": "staging",
    "prod": "production",
}

# Characters refused in any name that ends up in a file name
FORBIDDEN_NAME_CHARS = '/\\:*?"<>|'

# Kinds accepted by the manifest validator
KNOWN_KINDS = (
    "Deployment", "Service", "ConfigMap", "Secret", "ServiceAccount",
    "Pod", "StatefulSet", "DaemonSet", "Kustomization",
)
