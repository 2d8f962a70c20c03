"""Task definition loading from JSON/YAML files, ARN helpers."""

import json
import re
import sys
from pathlib import Path

import yaml

from ecs2k8s.pacts.types import (
    TaskDefinitionSource, ContainerDefinition, PortMapping, KeyValuePair,
)
from ecs2k8s.pacts.errors import TaskDefinitionLoadError

_TASK_DEF_NAME_RE = re.compile(r'task-definition/([^:/]+)')

_SUFFIXES = (".json", ".yaml", ".yml")


def extract_cluster_name(arn: str) -> str:
    """Cluster name from a cluster ARN (last path segment)."""
    return arn.rsplit("/", 1)[-1]


def extract_task_def_name(arn: str) -> str:
    """Family name from a task definition ARN, e.g. '.../task-definition/web:3' -> 'web'."""
    m = _TASK_DEF_NAME_RE.search(arn)
    if m:
        return m.group(1)
    return arn.removeprefix("arn:aws:ecs:")


def _int_or_none(value) -> int | None:
    """ECS numbers sometimes arrive as strings; anything unparsable is treated as missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _str_or_none(value) -> str | None:
    if value is None:
        return None
    return str(value)


def parse_container(raw: dict) -> ContainerDefinition:
    """Build a ContainerDefinition from an ECS containerDefinitions entry."""
    return ContainerDefinition(
        name=raw.get("name"),
        image=raw.get("image"),
        cpu=_int_or_none(raw.get("cpu")),
        memory=_int_or_none(raw.get("memory")),
        port_mappings=[
            PortMapping(container_port=_int_or_none(pm.get("containerPort")),
                        protocol=pm.get("protocol") or "tcp")
            for pm in raw.get("portMappings") or [] if isinstance(pm, dict)
        ],
        environment=[
            KeyValuePair(name=kv.get("name"), value=_str_or_none(kv.get("value")))
            for kv in raw.get("environment") or [] if isinstance(kv, dict)
        ],
    )


def parse_task_definition(raw: dict, default_name: str = "") -> TaskDefinitionSource:
    """Build a TaskDefinitionSource from an ECS task definition document.

    Accepts both the bare task definition and the describe-task-definition
    response wrapping it under 'taskDefinition'.
    """
    if "taskDefinition" in raw and isinstance(raw["taskDefinition"], dict):
        raw = raw["taskDefinition"]
    name = raw.get("family") or ""
    if not name and raw.get("taskDefinitionArn"):
        name = extract_task_def_name(raw["taskDefinitionArn"])
    name = name or default_name
    if not name:
        raise TaskDefinitionLoadError("task definition has no family or ARN to name it by")
    return TaskDefinitionSource(
        name=name,
        containers=[parse_container(c) for c in raw.get("containerDefinitions") or []
                    if isinstance(c, dict)],
        task_role_arn=raw.get("taskRoleArn") or None,
        execution_role_arn=raw.get("executionRoleArn") or None,
    )


def _load_documents(path: Path) -> list[dict]:
    """Load one file into a list of task definition documents."""
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
            docs = data if isinstance(data, list) else [data]
        else:
            docs = []
            for doc in yaml.safe_load_all(text):
                docs.extend(doc if isinstance(doc, list) else [doc])
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise TaskDefinitionLoadError(f"{path}: {exc.__class__.__name__}: {exc}") from exc
    # describe-task-definitions style bundles
    expanded = []
    for doc in docs:
        if isinstance(doc, dict) and isinstance(doc.get("taskDefinitions"), list):
            expanded.extend(doc["taskDefinitions"])
        elif doc is not None:
            expanded.append(doc)
    return [d for d in expanded if isinstance(d, dict)]


def load_task_definitions(path: str) -> list[TaskDefinitionSource]:
    """Load task definitions from a file, or from every .json/.yaml file in a directory.

    A single unreadable file raises TaskDefinitionLoadError; inside a
    directory, bad files are skipped with a warning. Duplicate names keep
    the first occurrence.
    """
    p = Path(path)
    if not p.exists():
        raise TaskDefinitionLoadError(f"input path does not exist: {path}")
    if p.is_dir():
        files = sorted(f for f in p.iterdir() if f.is_file() and f.suffix in _SUFFIXES)
    else:
        files = [p]

    sources: list[TaskDefinitionSource] = []
    seen: set[str] = set()
    for f in files:
        try:
            parsed = [parse_task_definition(d, default_name=f.stem) for d in _load_documents(f)]
        except TaskDefinitionLoadError as exc:
            if not p.is_dir():
                raise
            print(f"⚠ Skipping {f.name}: {exc}", file=sys.stderr)
            continue
        for source in parsed:
            if source.name in seen:
                print(f"⚠ Duplicate task definition '{source.name}' in {f.name}, skipped",
                      file=sys.stderr)
                continue
            seen.add(source.name)
            sources.append(source)
    return sources
