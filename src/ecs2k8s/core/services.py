"""Port filtering and Service construction."""

from ecs2k8s.pacts.types import PortMapping
from ecs2k8s.core.constants import MIN_PORT, MAX_PORT, DEFAULT_SERVICE_TYPE


def _normalize_protocol(protocol: str | None) -> str:
    """ECS 'tcp'/'udp' -> Kubernetes 'TCP'/'UDP'. Anything else is TCP."""
    proto = (protocol or "tcp").upper()
    return proto if proto in ("TCP", "UDP") else "TCP"


def filter_ports(port_mappings: list[PortMapping], container_name: str,
                 warnings: list[str]) -> list[dict]:
    """Return container ports within [1, 65535], first occurrence wins."""
    ports = []
    seen: set[tuple[int, str]] = set()
    for pm in port_mappings:
        port = pm.container_port
        if port is None:
            warnings.append(f"container {container_name}: port mapping without containerPort skipped")
            continue
        if not MIN_PORT <= port <= MAX_PORT:
            warnings.append(f"container {container_name}: invalid port {port} "
                            f"(must be {MIN_PORT}-{MAX_PORT}), skipped")
            continue
        protocol = _normalize_protocol(pm.protocol)
        if (port, protocol) in seen:
            warnings.append(f"container {container_name}: duplicate port {port}/{protocol} skipped")
            continue
        seen.add((port, protocol))
        ports.append({"containerPort": port, "protocol": protocol})
    return ports


def build_service(container_name: str, container_ports: list[dict],
                  service_type: str = DEFAULT_SERVICE_TYPE,
                  namespace: str | None = None) -> dict | None:
    """Build a Service exposing every container port, or None without ports.

    The first port is the primary one (single-port templates only read it).
    """
    if not container_ports:
        return None
    metadata: dict = {"name": container_name}
    if namespace:
        metadata["namespace"] = namespace
    metadata["labels"] = {"app": container_name}
    ports = []
    for cp in container_ports:
        ports.append({
            "name": f"{cp['protocol'].lower()}-{cp['containerPort']}",
            "port": cp["containerPort"],
            "targetPort": cp["containerPort"],
            "protocol": cp["protocol"],
        })
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": metadata,
        "spec": {
            "type": service_type,
            "selector": {"app": container_name},
            "ports": ports,
        },
    }


def primary_port(service: dict) -> int | None:
    """First port of a Service, if any."""
    ports = (service.get("spec") or {}).get("ports") or []
    return ports[0]["port"] if ports else None
