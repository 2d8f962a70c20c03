from __future__ import annotations

import json
import os
import sys

import pytest

from conftest import make_container
from ecs2k8s.cli import main, run_conversion
from ecs2k8s.pacts.errors import OutputDirError, PathContainmentError
from ecs2k8s.pacts.types import TaskDefinitionSource


def test_run_conversion_counts_failures(tmp_path, config, webapp) -> None:
    sources = [
        webapp,
        TaskDefinitionSource(name="empty", containers=[]),
        TaskDefinitionSource(name="broken", containers=[make_container(image="")]),
    ]
    warnings: list[str] = []
    summary = run_conversion(sources, str(tmp_path), config, warnings=warnings)
    assert summary.succeeded == 1
    assert summary.failed == 2
    assert [i.name for i in summary.infos] == ["webapp"]
    assert any("'empty' failed" in w for w in warnings)
    assert any("'broken' failed" in w for w in warnings)
    assert (tmp_path / "webapp-deployment.yaml").is_file()
    assert not (tmp_path / "empty-deployment.yaml").exists()


def test_run_conversion_packages(tmp_path, config, webapp) -> None:
    summary = run_conversion([webapp], str(tmp_path), config, cluster="prod",
                             create_helm=True, create_kustomize=True)
    assert summary.helm_path == os.path.join(str(tmp_path), "helm", "prod")
    assert summary.kustomize_path == os.path.join(str(tmp_path), "kustomize", "prod")
    assert (tmp_path / "helm/prod/Chart.yaml").is_file()
    assert (tmp_path / "kustomize/prod/overlays/prod/kustomization.yaml").is_file()


def test_run_conversion_without_successes_skips_packages(tmp_path, config) -> None:
    summary = run_conversion([TaskDefinitionSource(name="empty", containers=[])],
                             str(tmp_path), config, cluster="prod", create_helm=True)
    assert summary.succeeded == 0
    assert summary.helm_path is None
    assert not (tmp_path / "helm").exists()


def test_run_conversion_missing_output_dir(tmp_path, config, webapp) -> None:
    with pytest.raises(OutputDirError):
        run_conversion([webapp], str(tmp_path / "nope"), config)


def test_main_end_to_end(tmp_path, monkeypatch, capsys) -> None:
    src = tmp_path / "webapp.json"
    src.write_text(json.dumps({
        "family": "webapp",
        "containerDefinitions": [{"name": "web", "image": "nginx:1.21", "cpu": 256,
                                  "memory": 512, "portMappings": [{"containerPort": 80}]}],
    }))
    out = tmp_path / "out"
    monkeypatch.setattr(sys, "argv", ["ecs2k8s", "-i", str(src), "-c", "demo",
                                      "-o", str(out), "-H"])
    main()
    assert (out / "webapp-deployment.yaml").is_file()
    assert (out / "helm/demo/values.yaml").is_file()
    assert (out / "ecs2k8s.yaml").is_file()
    err = capsys.readouterr().err
    assert "Successfully converted: 1 task definition(s)" in err


def test_main_exits_when_nothing_converts(tmp_path, monkeypatch) -> None:
    src = tmp_path / "empty.json"
    src.write_text(json.dumps({"family": "empty", "containerDefinitions": []}))
    monkeypatch.setattr(sys, "argv", ["ecs2k8s", "-i", str(src), "-o", str(tmp_path / "o")])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1


def _write_task(path, family="webapp") -> None:
    path.write_text(json.dumps({
        "family": family,
        "containerDefinitions": [{"name": "web", "image": "nginx:1.21",
                                  "portMappings": [{"containerPort": 80}]}],
    }))


def test_main_output_path_is_a_file(tmp_path, monkeypatch, capsys) -> None:
    src = tmp_path / "webapp.json"
    _write_task(src)
    taken = tmp_path / "taken"
    taken.write_text("")
    monkeypatch.setattr(sys, "argv", ["ecs2k8s", "-i", str(src), "-o", str(taken)])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "Error: cannot create output directory" in err
    assert "Failed: 1 task definition(s)" in err


def test_main_empty_input_prints_summary(tmp_path, monkeypatch, capsys) -> None:
    src = tmp_path / "defs"
    src.mkdir()
    monkeypatch.setattr(sys, "argv", ["ecs2k8s", "-i", str(src), "-o", str(tmp_path / "o")])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "Nothing to convert" in err
    assert "Successfully converted: 0 task definition(s)" in err


def test_main_packaging_failure_keeps_partial_counts(tmp_path, monkeypatch, capsys) -> None:
    src = tmp_path / "webapp.json"
    _write_task(src)
    out = tmp_path / "out"

    class BrokenRenderer:
        def __init__(self, *args, **kwargs):
            pass

        def render(self, infos):
            raise PathContainmentError("path 'helm/x' escapes output directory")

    monkeypatch.setattr("ecs2k8s.cli.HelmRenderer", BrokenRenderer)
    monkeypatch.setattr(sys, "argv", ["ecs2k8s", "-i", str(src), "-c", "demo",
                                      "-o", str(out), "-H"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "Error: path 'helm/x' escapes" in err
    assert "Successfully converted: 1 task definition(s)" in err
    assert "Failed: 0 task definition(s)" in err
    assert (out / "webapp-deployment.yaml").is_file()
