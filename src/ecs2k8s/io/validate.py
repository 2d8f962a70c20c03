"""Name and manifest validation."""

import re

import yaml

from ecs2k8s.pacts.types import FileSet
from ecs2k8s.pacts.errors import InvalidNameError, ManifestValidationError
from ecs2k8s.core.constants import FORBIDDEN_NAME_CHARS, KNOWN_KINDS

_CLUSTER_NAME_RE = re.compile(r'^[A-Za-z0-9_-]+$')


def validate_name(name: str | None, what: str = "task name") -> str:
    """Reject empty names and names with characters unsafe in file names."""
    if not name or not name.strip():
        raise InvalidNameError(f"{what} cannot be empty")
    bad = sorted({c for c in name if c in FORBIDDEN_NAME_CHARS})
    if bad:
        raise InvalidNameError(f"{what} '{name}' contains forbidden characters: {' '.join(bad)}")
    return name


def validate_cluster_name(name: str | None) -> str:
    """Cluster (and chart) names: alphanumerics, hyphens and underscores only."""
    if not name or not name.strip():
        raise InvalidNameError("cluster name cannot be empty")
    name = name.strip()
    if not _CLUSTER_NAME_RE.match(name):
        raise InvalidNameError(
            f"invalid cluster name '{name}' (only alphanumerics, hyphens and underscores)")
    return name


def validate_manifest(doc, path: str = "<manifest>") -> None:
    """Check a parsed manifest carries apiVersion, kind and metadata and a known kind."""
    if not isinstance(doc, dict):
        raise ManifestValidationError(f"{path}: manifest is not a mapping")
    for key in ("apiVersion", "kind", "metadata"):
        if not doc.get(key):
            raise ManifestValidationError(f"{path}: missing {key}")
    if doc["kind"] not in KNOWN_KINDS:
        raise ManifestValidationError(f"{path}: unsupported kind '{doc['kind']}'")


def validate_manifest_text(path: str, text: str) -> None:
    """Parse YAML text (possibly multi-document) and validate every document."""
    if not text.strip():
        raise ManifestValidationError(f"{path}: empty manifest")
    try:
        docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as exc:
        raise ManifestValidationError(f"{path}: invalid YAML ({exc.__class__.__name__})") from exc
    if not docs:
        raise ManifestValidationError(f"{path}: empty manifest")
    for doc in docs:
        validate_manifest(doc, path)


def validate_file_set(files: FileSet) -> None:
    """Validate every .yaml file of a rendered FileSet."""
    for path, text in files.items():
        if path.endswith(".yaml"):
            validate_manifest_text(path, text)
