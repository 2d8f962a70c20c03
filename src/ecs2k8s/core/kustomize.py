"""Kustomize packaging: a base of raw manifests plus per-environment overlays."""

import yaml

from ecs2k8s.pacts.types import TaskDefInfo, FileSet, Renderer
from ecs2k8s.core.constants import DEFAULT_OVERLAYS, DEFAULT_REPLICAS, MANAGED_BY
from ecs2k8s.core.convert import build_deployment
from ecs2k8s.io.output import per_container_names, to_yaml
from ecs2k8s.io.validate import validate_cluster_name, validate_name

KUSTOMIZE_API = "kustomize.config.k8s.io/v1beta1"


def _dump(doc: dict) -> str:
    return yaml.dump(doc, default_flow_style=False, sort_keys=False)


def kustomization(name: str, **fields) -> dict:
    """Kustomization document; empty fields are left out."""
    doc: dict = {
        "apiVersion": KUSTOMIZE_API,
        "kind": "Kustomization",
        "metadata": {"name": name},
    }
    doc.update({k: v for k, v in fields.items() if v})
    return doc


def namespace_patch(task_name: str, namespace: str, environment: str) -> dict:
    """Strategic-merge patch moving a Deployment to the overlay namespace."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": task_name, "namespace": namespace},
        "spec": {"template": {"metadata": {"labels": {"environment": environment}}}},
    }


class KustomizeRenderer(Renderer):
    """Kustomize tree under kustomize/<cluster>/ with base/ and overlays/."""
    name = "kustomize"

    def __init__(self, cluster: str, config: dict | None = None):
        self.cluster = validate_cluster_name(cluster)
        self.config = config or {}

    @property
    def overlays(self) -> dict[str, str]:
        return self.config.get("overlays") or DEFAULT_OVERLAYS

    def _base(self, infos: list[TaskDefInfo]) -> tuple[FileSet, list[str]]:
        """Base manifests (one resource per file) and their relative paths."""
        files: FileSet = {}
        resources: list[str] = []

        def add(subdir: str, stem: str, doc: dict) -> None:
            rel = f"{subdir}/{stem}.yaml"
            files[rel] = to_yaml(doc)
            resources.append(rel)

        for info in infos:
            task = validate_name(info.name)
            m = info.manifests
            if m.pod_spec is not None:
                # Namespace comes from the overlays
                add("deployments", f"{task}-deployment", build_deployment(
                    task, m.pod_spec, replicas=self.config.get("replicas", DEFAULT_REPLICAS)))
            for subdir, suffix, items in (("services", "service", m.services),
                                          ("configmaps", "configmap", m.config_maps),
                                          ("secrets", "secret", m.secrets)):
                if items:
                    for stem, doc in zip(per_container_names(task, suffix, items), items):
                        add(subdir, stem, _without_namespace(doc))
            if m.service_account:
                add("serviceaccounts", f"{task}-serviceaccount",
                    _without_namespace(m.service_account))
        return files, resources

    def _overlay(self, env: str, namespace: str, infos: list[TaskDefInfo]) -> FileSet:
        files: FileSet = {}
        patches = []
        for info in infos:
            if info.manifests.pod_spec is None:
                continue
            rel = f"patches/{info.name}-namespace-patch.yaml"
            files[rel] = _dump(namespace_patch(info.name, namespace, env))
            patches.append({"target": {"kind": "Deployment", "name": info.name}, "path": rel})
        files["kustomization.yaml"] = _dump(kustomization(
            env,
            resources=["../../base"],
            namespace=namespace,
            patches=patches,
            commonLabels={"environment": env},
        ))
        return files

    def render(self, infos: list[TaskDefInfo]) -> FileSet:
        root = f"kustomize/{self.cluster}"
        files: FileSet = {}

        base_files, resources = self._base(infos)
        for rel, text in base_files.items():
            files[f"{root}/base/{rel}"] = text
        files[f"{root}/base/kustomization.yaml"] = _dump(kustomization(
            "base", resources=resources, commonLabels={"managed-by": MANAGED_BY}))

        for env, namespace in self.overlays.items():
            for rel, text in self._overlay(env, namespace, infos).items():
                files[f"{root}/overlays/{env}/{rel}"] = text

        # Labelling anchor only, declares no resources
        files[f"{root}/kustomization.yaml"] = _dump(kustomization(
            self.cluster, commonLabels={"cluster": self.cluster, "managed-by": MANAGED_BY}))
        return files


def _without_namespace(doc: dict) -> dict:
    """Shallow copy of a manifest with metadata.namespace removed."""
    meta = {k: v for k, v in doc.get("metadata", {}).items() if k != "namespace"}
    return {**doc, "metadata": meta}
