"""ECS container definition -> Kubernetes container spec + companion resources."""

import base64
from dataclasses import dataclass

from ecs2k8s.pacts.types import ContainerDefinition, ContainerResources, ContainerConfig, ConvertContext
from ecs2k8s.core.constants import DEFAULT_NAMESPACE, DEFAULT_SERVICE_TYPE
from ecs2k8s.core.env import classify_env, secret_prefixes
from ecs2k8s.core.resources import cpu_to_quantity, memory_to_quantity
from ecs2k8s.core.services import filter_ports, build_service


@dataclass
class TranslatedContainer:
    """Everything one ECS container contributes to the task's manifests."""
    spec: dict
    resources: ContainerResources
    config: ContainerConfig
    config_map: dict | None = None
    secret: dict | None = None
    service: dict | None = None


def _metadata(name: str, app: str, namespace: str | None) -> dict:
    meta: dict = {"name": name}
    if namespace:
        meta["namespace"] = namespace
    meta["labels"] = {"app": app}
    return meta


def build_config_map(container_name: str, data: dict[str, str],
                     namespace: str | None = None) -> dict | None:
    """ConfigMap '<container>-config', or None when data is empty."""
    if not data:
        return None
    return {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": _metadata(f"{container_name}-config", container_name, namespace),
        "data": dict(data),
    }


def build_secret(container_name: str, data: dict[str, str],
                 namespace: str | None = None) -> dict | None:
    """Opaque Secret '<container>-secret' with base64 data, or None when empty."""
    if not data:
        return None
    encoded = {k: base64.b64encode(v.encode("utf-8")).decode("ascii") for k, v in data.items()}
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": _metadata(f"{container_name}-secret", container_name, namespace),
        "type": "Opaque",
        "data": encoded,
    }


def translate_container(container: ContainerDefinition,
                        ctx: ConvertContext) -> TranslatedContainer | None:
    """Translate one ECS container. Returns None (with a warning) if unusable."""
    if not container.name:
        ctx.warnings.append("container without a name skipped")
        return None
    if not container.image:
        ctx.warnings.append(f"container {container.name} has no image, skipped")
        return None

    name = container.name
    namespace = ctx.config.get("namespace", DEFAULT_NAMESPACE)
    cpu = cpu_to_quantity(container.cpu, ctx.warnings)
    memory = memory_to_quantity(container.memory, ctx.warnings)
    ports = filter_ports(container.port_mappings, name, ctx.warnings)
    config_vars, secret_vars = classify_env(
        container.environment, ctx.warnings, secret_prefixes(ctx.config))

    config_map = build_config_map(name, config_vars, namespace)
    secret = build_secret(name, secret_vars, namespace)
    service = build_service(name, ports,
                            ctx.config.get("service_type", DEFAULT_SERVICE_TYPE),
                            namespace)

    spec: dict = {"name": name, "image": container.image}
    if ports:
        spec["ports"] = ports
    env_from = []
    if config_map:
        env_from.append({"configMapRef": {"name": config_map["metadata"]["name"]}})
    if secret:
        env_from.append({"secretRef": {"name": secret["metadata"]["name"]}})
    if env_from:
        spec["envFrom"] = env_from
    # No distinct request/limit policy
    spec["resources"] = {
        "limits": {"cpu": cpu, "memory": memory},
        "requests": {"cpu": cpu, "memory": memory},
    }

    port_numbers = [p["containerPort"] for p in ports]
    return TranslatedContainer(
        spec=spec,
        resources=ContainerResources(name=name, cpu=cpu, memory=memory,
                                     ports=tuple(port_numbers)),
        config=ContainerConfig(
            name=name, image=container.image, cpu=cpu, memory=memory,
            ports=[dict(p) for p in ports], env=config_vars,
            config_map_name=config_map["metadata"]["name"] if config_map else None,
            secret_name=secret["metadata"]["name"] if secret else None,
        ),
        config_map=config_map,
        secret=secret,
        service=service,
    )
