# tests/core/config/test_pipeline_loader.py
"""
Testes do loader de configuração do pipeline.

Este módulo valida o carregamento de arquivos YAML/JSON, a validação
estrutural da lista `workflows` e a normalização de valores escalares.

Invariantes:
    - A ordem das entradas é preservada
    - Erros estruturais levantam subclasses de ConfigError
    - Placeholders não são resolvidos no carregamento
"""

import json

import pytest

from workflow_runner.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    InvalidStepConfigError,
    UnsupportedConfigFormatError,
    load_config,
    parse_config,
)


PIPELINE_YAML = """\
workflows:
  - type: http
    parameters:
      url: https://example.com/${PATH}
      method: GET
  - type: Echo
    parameters:
      text: "code=${status_code}"
  - type: command
    parameters:
      program: sleep 1
      daemon: true
      inherit_io: false
  - type: echo
"""


def test_load_yaml_preserves_order_and_raw_values(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text(PIPELINE_YAML, encoding="utf-8")

    config = load_config(path)

    assert [s.type_name for s in config] == ["http", "Echo", "command", "echo"]
    assert config.steps[0].raw_parameters["url"] == "https://example.com/${PATH}"
    assert config.steps[1].raw_parameters["text"] == "code=${status_code}"
    assert config.source == str(path)


def test_boolean_literals_stay_as_written(tmp_path):
    path = tmp_path / "pipeline.yml"
    path.write_text(PIPELINE_YAML, encoding="utf-8")

    params = load_config(path).steps[2].raw_parameters
    assert params["daemon"] == "true"
    assert params["inherit_io"] == "false"


@pytest.mark.parametrize(
    "literal",
    ["1.10", "0x1F", "2024-01-01", "007", "1e3", "yes", "~", "null"],
)
def test_yaml_scalars_keep_source_text(tmp_path, literal):
    path = tmp_path / "pipeline.yaml"
    path.write_text(
        f"workflows:\n  - type: echo\n    parameters:\n      text: {literal}\n",
        encoding="utf-8",
    )

    assert load_config(path).steps[0].raw_parameters["text"] == literal


def test_yaml_empty_parameters_block(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text("workflows:\n  - type: echo\n    parameters:\n", encoding="utf-8")
    assert dict(load_config(path).steps[0].raw_parameters) == {}


def test_missing_parameters_means_empty(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text(PIPELINE_YAML, encoding="utf-8")
    assert dict(load_config(path).steps[3].raw_parameters) == {}


def test_load_json(tmp_path):
    path = tmp_path / "pipeline.json"
    path.write_text(
        json.dumps({"workflows": [{"type": "echo", "parameters": {"text": "hi", "n": 3, "x": None}}]}),
        encoding="utf-8",
    )
    params = load_config(path).steps[0].raw_parameters
    assert dict(params) == {"text": "hi", "n": "3", "x": ""}


def test_raw_parameters_are_read_only(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text(PIPELINE_YAML, encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path).steps[0].raw_parameters["url"] = "x"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_directory_is_not_a_config(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        load_config(tmp_path)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "pipeline.toml"
    path.write_text("workflows = []", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text("workflows: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)


def test_malformed_json(tmp_path):
    path = tmp_path / "pipeline.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)


@pytest.mark.parametrize("data", [None, [], "text", {"steps": []}, {"workflows": {"type": "echo"}}])
def test_invalid_root(data):
    with pytest.raises(InvalidConfigRootTypeError):
        parse_config(data)


@pytest.mark.parametrize(
    "entry",
    [
        "echo",
        {"parameters": {"text": "x"}},
        {"type": ""},
        {"type": 3},
        {"type": "echo", "parameters": ["text"]},
        {"type": "echo", "parameters": {"text": ["a", "b"]}},
        {"type": "echo", "parameters": {"text": {"nested": "x"}}},
    ],
)
def test_invalid_step_entry(entry):
    with pytest.raises(InvalidStepConfigError):
        parse_config({"workflows": [entry]})


def test_all_errors_share_base_class():
    for exc in (
        ConfigNotFoundError,
        ConfigParseError,
        InvalidConfigRootTypeError,
        InvalidStepConfigError,
        UnsupportedConfigFormatError,
    ):
        assert issubclass(exc, ConfigError)


def test_empty_pipeline_is_valid():
    assert len(parse_config({"workflows": []})) == 0
