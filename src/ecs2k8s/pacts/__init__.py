"""Public contracts: data model, renderer base class, errors."""

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

__all__ = [
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
]
