# src/workflow_runner/core/config/loader.py
"""
Loader canônico de configuração do workflow_runner.

Este módulo é responsável por carregar e validar estruturalmente o
arquivo que descreve o pipeline, produzindo um `PipelineConfig`.

Formato (v1):

    workflows:
      - type: http
        parameters:
          url: https://example.com/${PATH}
          method: GET
      - type: echo
        parameters:
          text: "status=${status_code}"

Responsabilidades do módulo:
    - Carregar arquivos YAML ou JSON
    - Validar requisitos estruturais mínimos (raiz, lista, entradas)
    - Normalizar valores escalares de parâmetros para string

Política de normalização de parâmetros:
    - YAML é lido com `yaml.BaseLoader`: todo escalar chega como o texto
      escrito pelo usuário (`1.10`, `0x1F`, `2024-01-01`, `true` intactos)
    - JSON: str inalterado, bool → "true" / "false", número → str(valor),
      null → ""
    - lista / mapa  → erro (InvalidStepConfigError)

Limites explícitos:
    - Não resolve placeholders (responsabilidade do Resolver, na execução)
    - Não valida `type` contra o Registry (lookup ocorre na execução)
    - Não executa pipeline
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Union
import json

import yaml  # PyYAML

from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    InvalidStepConfigError,
    UnsupportedConfigFormatError,
)
from .models import PipelineConfig, StepConfig


WORKFLOWS_KEY = "workflows"


def _load_file(path: Path) -> Any:
    """
    Carrega um arquivo de configuração e devolve o conteúdo bruto.

    Raises:
        ConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        ConfigParseError: Se o conteúdo for sintaticamente inválido.
        ConfigError: Se o arquivo não puder ser lido.
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or '(sem extensão)'}")

    try:
        with path.open("r", encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.load(f, Loader=yaml.BaseLoader)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"Configuração malformada em {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Não foi possível ler {path}: {e}") from e


def _normalize_value(value: Any, *, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise InvalidStepConfigError(
        f"{where} deve ser escalar, recebido: {type(value).__name__}"
    )


def _parse_step(raw: Any, idx: int) -> StepConfig:
    where = f"{WORKFLOWS_KEY}[{idx}]"
    if not isinstance(raw, Mapping):
        raise InvalidStepConfigError(f"{where} deve ser um mapa, recebido: {type(raw).__name__}")

    type_name = raw.get("type")
    if not isinstance(type_name, str) or not type_name.strip():
        raise InvalidStepConfigError(f"{where}.type deve ser uma string não vazia")

    params = raw.get("parameters")
    # `parameters:` sem valor chega como "" pelo BaseLoader
    if params is None or params == "":
        params = {}
    if not isinstance(params, Mapping):
        raise InvalidStepConfigError(
            f"{where}.parameters deve ser um mapa, recebido: {type(params).__name__}"
        )

    normalized: Dict[str, str] = {}
    for key, value in params.items():
        normalized[str(key)] = _normalize_value(value, where=f"{where}.parameters.{key}")

    return StepConfig(type_name=type_name.strip(), raw_parameters=normalized)


def parse_config(data: Any, *, source: Union[str, None] = None) -> PipelineConfig:
    """
    Valida a estrutura bruta (já desserializada) e produz um PipelineConfig.

    Raises:
        InvalidConfigRootTypeError: Se a raiz não for um mapa com `workflows` (lista).
        InvalidStepConfigError: Se alguma entrada for inválida.
    """
    if not isinstance(data, Mapping):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    entries = data.get(WORKFLOWS_KEY)
    if not isinstance(entries, list):
        raise InvalidConfigRootTypeError(
            f"Config deve conter `{WORKFLOWS_KEY}` como lista, recebido: {type(entries).__name__}"
        )

    steps: List[StepConfig] = [_parse_step(raw, idx) for idx, raw in enumerate(entries)]
    return PipelineConfig.of(steps, source=source)


def load_config(path: Union[str, Path]) -> PipelineConfig:
    """
    Carrega o arquivo de configuração do pipeline.

    Args:
        path (str | Path): Caminho do arquivo YAML/JSON.

    Returns:
        PipelineConfig: Configuração imutável, na ordem de execução.

    Raises:
        ConfigError: Qualquer erro de startup (ver `errors`).
    """
    config_path = Path(path).expanduser()
    return parse_config(_load_file(config_path), source=str(config_path))
