from __future__ import annotations

import json

import pytest

from ecs2k8s.io.parsing import (
    extract_cluster_name, extract_task_def_name, load_task_definitions, parse_task_definition,
)
from ecs2k8s.pacts.errors import TaskDefinitionLoadError

DESCRIBED = {
    "taskDefinition": {
        "taskDefinitionArn": "arn:aws:ecs:us-east-1:123456789012:task-definition/webapp:7",
        "family": "webapp",
        "taskRoleArn": "arn:aws:iam::123456789012:role/webapp-task",
        "containerDefinitions": [{
            "name": "web",
            "image": "nginx:1.21",
            "cpu": "512",
            "memory": 256,
            "portMappings": [{"containerPort": 80, "protocol": "tcp"}],
            "environment": [{"name": "LOG_LEVEL", "value": "info"},
                            {"name": "WORKERS", "value": 4}],
        }],
    },
}


def test_arn_helpers() -> None:
    assert extract_cluster_name("arn:aws:ecs:us-east-1:123:cluster/prod") == "prod"
    assert extract_task_def_name(
        "arn:aws:ecs:us-east-1:123:task-definition/webapp:7") == "webapp"
    assert extract_task_def_name("arn:aws:ecs:webapp") == "webapp"


def test_parse_describe_output() -> None:
    source = parse_task_definition(DESCRIBED)
    assert source.name == "webapp"
    assert source.task_role_arn.endswith("role/webapp-task")
    assert source.execution_role_arn is None
    c = source.containers[0]
    assert c.cpu == 512
    assert c.memory == 256
    assert [(p.container_port, p.protocol) for p in c.port_mappings] == [(80, "tcp")]
    assert [(kv.name, kv.value) for kv in c.environment] == [
        ("LOG_LEVEL", "info"), ("WORKERS", "4")]


def test_name_falls_back_to_arn_then_default() -> None:
    raw = {"taskDefinitionArn": "arn:aws:ecs:r:1:task-definition/api:2",
           "containerDefinitions": []}
    assert parse_task_definition(raw).name == "api"
    assert parse_task_definition({"containerDefinitions": []}, default_name="x").name == "x"
    with pytest.raises(TaskDefinitionLoadError):
        parse_task_definition({"containerDefinitions": []})


def test_unparsable_numbers_become_missing() -> None:
    raw = {"family": "t", "containerDefinitions": [{"name": "c", "image": "i", "cpu": "lots"}]}
    assert parse_task_definition(raw).containers[0].cpu is None


def test_load_json_file(tmp_path) -> None:
    path = tmp_path / "webapp.json"
    path.write_text(json.dumps(DESCRIBED))
    [source] = load_task_definitions(str(path))
    assert source.name == "webapp"


def test_load_yaml_file_with_bundle(tmp_path) -> None:
    path = tmp_path / "bundle.yaml"
    path.write_text(
        "taskDefinitions:\n"
        "  - family: api\n"
        "    containerDefinitions:\n"
        "      - name: api\n"
        "        image: example/api:1\n"
        "  - family: worker\n"
        "    containerDefinitions: []\n"
    )
    assert [s.name for s in load_task_definitions(str(path))] == ["api", "worker"]


def test_directory_skips_bad_files_and_duplicates(tmp_path, capsys) -> None:
    (tmp_path / "a.json").write_text(json.dumps(DESCRIBED))
    (tmp_path / "b.json").write_text("{not json")
    (tmp_path / "c.yaml").write_text("family: webapp\ncontainerDefinitions: []\n")
    (tmp_path / "notes.txt").write_text("ignored")
    sources = load_task_definitions(str(tmp_path))
    assert [s.name for s in sources] == ["webapp"]
    err = capsys.readouterr().err
    assert "Skipping b.json" in err
    assert "Duplicate task definition 'webapp'" in err


def test_single_bad_file_raises(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("[")
    with pytest.raises(TaskDefinitionLoadError):
        load_task_definitions(str(path))
    with pytest.raises(TaskDefinitionLoadError):
        load_task_definitions(str(tmp_path / "missing.json"))
