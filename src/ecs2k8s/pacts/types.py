"""Public data types shared by the converter and the renderers."""

from dataclasses import dataclass, field

# Relative output path -> file text
FileSet = dict[str, str]


@dataclass
class PortMapping:
    """One ECS port mapping (hostPort is not carried over)."""
    container_port: int | None
    protocol: str = "tcp"


@dataclass
class KeyValuePair:
    """One ECS environment entry. Either side may be missing in raw input."""
    name: str | None
    value: str | None


@dataclass
class ContainerDefinition:
    """An ECS container definition, reduced to the fields we translate."""
    name: str | None
    image: str | None
    cpu: int | None = None
    memory: int | None = None
    port_mappings: list[PortMapping] = field(default_factory=list)
    environment: list[KeyValuePair] = field(default_factory=list)


@dataclass
class TaskDefinitionSource:
    """An ECS task definition as handed over by a provider. Read-only."""
    name: str
    containers: list[ContainerDefinition] = field(default_factory=list)
    task_role_arn: str | None = None
    execution_role_arn: str | None = None


@dataclass(frozen=True)
class ContainerResources:
    """Derived resource summary of one translated container."""
    name: str
    cpu: str
    memory: str
    ports: tuple[int, ...] = ()


@dataclass
class ContainerConfig:
    """Per-container view consumed by the packagers."""
    name: str
    image: str
    cpu: str
    memory: str
    # {"containerPort": int, "protocol": "TCP"|"UDP"}, as in the pod spec
    ports: list[dict] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    config_map_name: str | None = None
    secret_name: str | None = None


@dataclass
class K8sManifests:
    """Kubernetes resources produced from one task definition.

    ConfigMaps and Secrets are only present with non-empty data, Services
    only with at least one valid port.
    """
    pod_spec: dict | None = None
    config_maps: list[dict] = field(default_factory=list)
    secrets: list[dict] = field(default_factory=list)
    services: list[dict] = field(default_factory=list)
    service_account: dict | None = None
    resources: list[ContainerResources] = field(default_factory=list)


@dataclass
class TaskDefInfo:
    """Unit of work threaded through writing and packaging."""
    name: str
    image: str
    containers: list[ContainerConfig]
    manifests: K8sManifests
    task_role_arn: str = ""
    execution_role_arn: str = ""


@dataclass
class ConvertContext:
    """Shared state passed through a conversion run."""
    config: dict = field(default_factory=dict)
    warnings: list = field(default_factory=list)


class Renderer:
    """Base class for output formats. Subclasses turn TaskDefInfos into files."""
    name: str = ""

    def render(self, infos: list[TaskDefInfo]) -> FileSet:
        """Render infos to a FileSet. Override in subclasses."""
        return {}


@dataclass
class RunSummary:
    """Outcome of a conversion run."""
    output_dir: str
    succeeded: int = 0
    failed: int = 0
    infos: list = field(default_factory=list)
    written: list = field(default_factory=list)
    helm_path: str | None = None
    kustomize_path: str | None = None
