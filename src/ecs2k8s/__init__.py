"""ecs2k8s: convert AWS ECS task definitions to Kubernetes manifests, Helm charts and Kustomize trees.

Re-exports the public API.
"""

from ecs2k8s.pacts.types import (
    PortMapping, KeyValuePair, ContainerDefinition, TaskDefinitionSource,
    ContainerResources, ContainerConfig, K8sManifests, TaskDefInfo,
    ConvertContext, FileSet, Renderer, RunSummary,
)
from ecs2k8s.pacts.errors import (
    Ecs2K8sError, ConversionError, NoContainersError, NoValidContainersError,
    OutputError, OutputDirError, InvalidNameError, PathContainmentError,
    TaskDefinitionLoadError, ManifestValidationError,
)
from ecs2k8s.core.resources import cpu_to_quantity, memory_to_quantity
from ecs2k8s.core.env import classify_env
from ecs2k8s.core.containers import translate_container
from ecs2k8s.core.identity import resolve_service_account
from ecs2k8s.core.convert import assemble, build_task_def_info, build_deployment
from ecs2k8s.core.helm import HelmRenderer
from ecs2k8s.core.kustomize import KustomizeRenderer
from ecs2k8s.io.output import ManifestRenderer, write_manifests, write_file_set
from ecs2k8s.io.parsing import load_task_definitions

__all__ = [
    # Data model & base classes
    "PortMapping",
    "KeyValuePair",
    "ContainerDefinition",
    "TaskDefinitionSource",
    "ContainerResources",
    "ContainerConfig",
    "K8sManifests",
    "TaskDefInfo",
    "ConvertContext",
    "FileSet",
    "Renderer",
    "RunSummary",
    # Errors
    "Ecs2K8sError",
    "ConversionError",
    "NoContainersError",
    "NoValidContainersError",
    "OutputError",
    "OutputDirError",
    "InvalidNameError",
    "PathContainmentError",
    "TaskDefinitionLoadError",
    "ManifestValidationError",
    # Conversion
    "cpu_to_quantity",
    "memory_to_quantity",
    "classify_env",
    "translate_container",
    "resolve_service_account",
    "assemble",
    "build_task_def_info",
    "build_deployment",
    # Renderers & writers
    "ManifestRenderer",
    "HelmRenderer",
    "KustomizeRenderer",
    "write_manifests",
    "write_file_set",
    "load_task_definitions",
]
