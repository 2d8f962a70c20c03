"""Configuration file handling: load/save ecs2k8s.yaml."""

import os

import yaml

from ecs2k8s.core.constants import (
    DEFAULT_NAMESPACE, DEFAULT_REPLICAS, DEFAULT_SERVICE_TYPE, DEFAULT_OVERLAYS, SERVICE_TYPES,
)


def load_config(path: str | None) -> dict:
    """Load ecs2k8s.yaml or return the default config."""
    if path and os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = {}
    cfg.setdefault("namespace", DEFAULT_NAMESPACE)
    cfg.setdefault("replicas", DEFAULT_REPLICAS)
    cfg.setdefault("service_type", DEFAULT_SERVICE_TYPE)
    cfg.setdefault("always_emit_service_account", True)
    cfg.setdefault("extra_secret_prefixes", [])
    cfg.setdefault("chart_version", "1.0.0")
    cfg.setdefault("overlays", dict(DEFAULT_OVERLAYS))
    return cfg


def config_warnings(config: dict) -> list[str]:
    """Sanity checks on user-supplied values. Offending values are reset to defaults."""
    warnings = []
    if config.get("service_type") not in SERVICE_TYPES:
        warnings.append(f"unknown service_type '{config.get('service_type')}', "
                        f"using {DEFAULT_SERVICE_TYPE}")
        config["service_type"] = DEFAULT_SERVICE_TYPE
    replicas = config.get("replicas")
    if not isinstance(replicas, int) or isinstance(replicas, bool) or replicas < 0:
        warnings.append(f"invalid replicas '{replicas}', using {DEFAULT_REPLICAS}")
        config["replicas"] = DEFAULT_REPLICAS
    prefixes = config.get("extra_secret_prefixes")
    if not isinstance(prefixes, list) or not all(isinstance(p, str) for p in prefixes):
        warnings.append(f"extra_secret_prefixes must be a list of strings, "
                        f"ignoring '{prefixes}'")
        config["extra_secret_prefixes"] = []
    overlays = config.get("overlays")
    if (not isinstance(overlays, dict) or not overlays
            or not all(isinstance(k, str) and isinstance(v, str) for k, v in overlays.items())):
        warnings.append(f"overlays must map environment names to namespaces, "
                        f"using {', '.join(DEFAULT_OVERLAYS)}")
        config["overlays"] = dict(DEFAULT_OVERLAYS)
    return warnings


def save_config(path: str, config: dict) -> None:
    """Write ecs2k8s.yaml."""
    header = "# Configuration for ecs2k8s, edit and re-run to apply\n\n"
    with open(path, "w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
