from __future__ import annotations

from ecs2k8s.io.config import config_warnings, load_config, save_config


def test_defaults() -> None:
    cfg = load_config(None)
    assert cfg["namespace"] == "default"
    assert cfg["replicas"] == 1
    assert cfg["service_type"] == "ClusterIP"
    assert cfg["always_emit_service_account"] is True
    assert cfg["overlays"] == {"dev": "development", "staging": "staging", "prod": "production"}


def test_user_values_kept(tmp_path) -> None:
    path = tmp_path / "ecs2k8s.yaml"
    path.write_text("namespace: apps\nreplicas: 3\n")
    cfg = load_config(str(path))
    assert cfg["namespace"] == "apps"
    assert cfg["replicas"] == 3
    assert cfg["service_type"] == "ClusterIP"


def test_invalid_values_reset_with_warning() -> None:
    cfg = load_config(None)
    cfg["service_type"] = "Ingress"
    cfg["replicas"] = -2
    warnings = config_warnings(cfg)
    assert len(warnings) == 2
    assert cfg["service_type"] == "ClusterIP"
    assert cfg["replicas"] == 1


def test_save_then_load(tmp_path) -> None:
    path = tmp_path / "ecs2k8s.yaml"
    cfg = load_config(None)
    cfg["namespace"] = "apps"
    save_config(str(path), cfg)
    assert path.read_text().startswith("# Configuration for ecs2k8s")
    assert load_config(str(path)) == cfg


def test_extra_secret_prefixes_must_be_a_list() -> None:
    cfg = load_config(None)
    cfg["extra_secret_prefixes"] = "STRIPE"
    warnings = config_warnings(cfg)
    assert any("extra_secret_prefixes" in w for w in warnings)
    assert cfg["extra_secret_prefixes"] == []


def test_overlays_must_be_a_mapping(tmp_path) -> None:
    path = tmp_path / "ecs2k8s.yaml"
    path.write_text("overlays:\n  - dev\n  - prod\n")
    cfg = load_config(str(path))
    warnings = config_warnings(cfg)
    assert any("overlays" in w for w in warnings)
    assert cfg["overlays"] == {"dev": "development", "staging": "staging", "prod": "production"}


def test_valid_config_has_no_warnings() -> None:
    cfg = load_config(None)
    cfg["extra_secret_prefixes"] = ["STRIPE"]
    cfg["overlays"] = {"qa": "quality"}
    assert config_warnings(cfg) == []
