"""Output writing: raw manifests, file sets, warnings."""

import os
import sys

import yaml

from ecs2k8s.pacts.types import K8sManifests, TaskDefInfo, FileSet, Renderer
from ecs2k8s.pacts.errors import OutputDirError, PathContainmentError
from ecs2k8s.core.constants import DEFAULT_NAMESPACE, DEFAULT_REPLICAS
from ecs2k8s.core.convert import build_deployment
from ecs2k8s.core.identity import role_arn_of
from ecs2k8s.io.validate import validate_name, validate_file_set

HEADER = "# Generated by ecs2k8s, do not edit manually\n"

_PROBE_NAME = ".ecs2k8s-write-probe"


def to_yaml(doc: dict, header: bool = True) -> str:
    """Serialize one manifest. Key order is kept, so output is deterministic."""
    body = yaml.dump(doc, default_flow_style=False, sort_keys=False)
    return (HEADER + body) if header else body


def _owner(doc: dict) -> str:
    """Container owning a per-container resource (its app label, else its name)."""
    meta = doc.get("metadata", {})
    return (meta.get("labels") or {}).get("app") or meta.get("name", "")


def per_container_names(task_name: str, kind_suffix: str, docs: list[dict]) -> list[str]:
    """File stems for per-container resources of one kind.

    A single resource gets '<task>-<kind>', several get '<task>-<kind>-<container>'.
    """
    if len(docs) == 1:
        return [f"{task_name}-{kind_suffix}"]
    return [f"{task_name}-{kind_suffix}-{validate_name(_owner(d), 'container name')}"
            for d in docs]


def manifest_documents(task_name: str, manifests: K8sManifests,
                       config: dict | None = None) -> dict[str, dict]:
    """Map '<stem>' -> manifest for everything the raw writer emits, in write order."""
    config = config or {}
    docs: dict[str, dict] = {}
    # A bare ServiceAccount is scaffolding; only an IRSA-bound one is written out,
    # and the Deployment only names an account that ships alongside it
    writes_account = bool(role_arn_of(manifests.service_account))
    if manifests.pod_spec is not None:
        pod_spec = manifests.pod_spec
        if not writes_account and "serviceAccountName" in pod_spec:
            pod_spec = {k: v for k, v in pod_spec.items() if k != "serviceAccountName"}
        docs[f"{task_name}-deployment"] = build_deployment(
            task_name, pod_spec,
            namespace=config.get("namespace", DEFAULT_NAMESPACE),
            replicas=config.get("replicas", DEFAULT_REPLICAS),
        )
    for suffix, items in (("configmap", manifests.config_maps),
                          ("secret", manifests.secrets),
                          ("service", manifests.services)):
        if items:
            docs.update(zip(per_container_names(task_name, suffix, items), items))
    if writes_account:
        docs[f"{task_name}-serviceaccount"] = manifests.service_account
    return docs


class ManifestRenderer(Renderer):
    """Flat directory of raw manifests, one file per resource."""
    name = "manifests"

    def __init__(self, config: dict | None = None):
        self.config = config or {}

    def render_task(self, task_name: str, manifests: K8sManifests) -> FileSet:
        validate_name(task_name)
        return {f"{stem}.yaml": to_yaml(doc)
                for stem, doc in manifest_documents(task_name, manifests, self.config).items()}

    def render(self, infos: list[TaskDefInfo]) -> FileSet:
        files: FileSet = {}
        for info in infos:
            files.update(self.render_task(info.name, info.manifests))
        return files


def check_output_dir(output_dir: str) -> None:
    """Ensure output_dir exists, is a directory and is writable (probe file)."""
    if not output_dir:
        raise OutputDirError("output directory path cannot be empty")
    if not os.path.exists(output_dir):
        raise OutputDirError(f"output directory does not exist: {output_dir}")
    if not os.path.isdir(output_dir):
        raise OutputDirError(f"path exists but is not a directory: {output_dir}")
    probe = os.path.join(output_dir, _PROBE_NAME)
    try:
        with open(probe, "w", encoding="utf-8") as f:
            f.write("")
        os.remove(probe)
    except OSError as exc:
        raise OutputDirError(f"output directory is not writable: {output_dir} ({exc})") from exc


def resolve_inside(output_dir: str, rel_path: str) -> str:
    """Absolute path of rel_path, refusing anything that escapes output_dir."""
    root = os.path.realpath(output_dir)
    target = os.path.realpath(os.path.join(root, rel_path))
    if os.path.commonpath([root, target]) != root or target == root:
        raise PathContainmentError(f"path '{rel_path}' escapes output directory {output_dir}")
    return target


def write_file_set(output_dir: str, files: FileSet) -> list[str]:
    """Write a FileSet under output_dir. All paths are checked before writing."""
    check_output_dir(output_dir)
    targets = [(resolve_inside(output_dir, rel), text) for rel, text in files.items()]
    written = []
    for path, text in targets:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        written.append(path)
    return written


def write_manifests(output_dir: str, task_name: str, manifests: K8sManifests,
                    config: dict | None = None) -> list[str]:
    """Write one task's raw manifests into output_dir, returning the paths written."""
    check_output_dir(output_dir)
    files = ManifestRenderer(config).render_task(task_name, manifests)
    validate_file_set(files)
    return write_file_set(output_dir, files)


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
