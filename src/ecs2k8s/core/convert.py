"""Manifest assembly: one ECS task definition -> K8sManifests / TaskDefInfo."""

import copy

from ecs2k8s.pacts.types import (
    TaskDefinitionSource, K8sManifests, TaskDefInfo, ContainerConfig, ConvertContext,
)
from ecs2k8s.pacts.errors import NoContainersError, NoValidContainersError
from ecs2k8s.core.constants import DEFAULT_NAMESPACE, DEFAULT_REPLICAS
from ecs2k8s.core.containers import translate_container
from ecs2k8s.core.identity import resolve_service_account


def _assemble(source: TaskDefinitionSource,
              ctx: ConvertContext) -> tuple[K8sManifests, list[ContainerConfig]]:
    """Translate containers in order, collecting manifests and per-container configs."""
    if not source.containers:
        raise NoContainersError(f"task definition {source.name} has no container definitions")
    if len(source.containers) > 1:
        ctx.warnings.append(f"task definition {source.name} has "
                            f"{len(source.containers)} containers, converting all")

    manifests = K8sManifests()
    configs: list[ContainerConfig] = []
    containers = []
    for container in source.containers:
        translated = translate_container(container, ctx)
        if translated is None:
            continue
        containers.append(translated.spec)
        configs.append(translated.config)
        manifests.resources.append(translated.resources)
        if translated.config_map:
            manifests.config_maps.append(translated.config_map)
        if translated.secret:
            manifests.secrets.append(translated.secret)
        if translated.service:
            manifests.services.append(translated.service)

    if not containers:
        raise NoValidContainersError(f"task definition {source.name} has no valid containers")

    manifests.service_account = resolve_service_account(
        source.name, source.task_role_arn, source.execution_role_arn,
        always_emit=ctx.config.get("always_emit_service_account", True),
        namespace=ctx.config.get("namespace", DEFAULT_NAMESPACE),
    )
    pod_spec: dict = {}
    if manifests.service_account:
        pod_spec["serviceAccountName"] = manifests.service_account["metadata"]["name"]
    pod_spec["containers"] = containers
    manifests.pod_spec = pod_spec
    return manifests, configs


def assemble(source: TaskDefinitionSource, ctx: ConvertContext) -> K8sManifests:
    """Convert every container of a task definition, in order.

    Raises NoContainersError / NoValidContainersError when nothing can be
    converted; skipped containers are only reported in ctx.warnings.
    """
    manifests, _ = _assemble(source, ctx)
    return manifests


def build_task_def_info(source: TaskDefinitionSource, ctx: ConvertContext) -> TaskDefInfo:
    """Assemble manifests plus the per-container configs the packagers need."""
    manifests, configs = _assemble(source, ctx)
    return TaskDefInfo(
        name=source.name,
        image=configs[0].image,
        containers=configs,
        manifests=manifests,
        task_role_arn=source.task_role_arn or "",
        execution_role_arn=source.execution_role_arn or "",
    )


def build_deployment(task_name: str, pod_spec: dict, namespace: str | None = None,
                     replicas: int = DEFAULT_REPLICAS) -> dict:
    """Wrap a pod spec into an apps/v1 Deployment labelled app=<task>."""
    metadata: dict = {"name": task_name}
    if namespace:
        metadata["namespace"] = namespace
    metadata["labels"] = {"app": task_name}
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": metadata,
        "spec": {
            "replicas": replicas,
            "selector": {"matchLabels": {"app": task_name}},
            "template": {
                "metadata": {"labels": {"app": task_name}},
                "spec": copy.deepcopy(pod_spec),
            },
        },
    }
