# src/workflow_runner/core/config/__init__.py

"""
Camada de configuração do workflow_runner.

Responsabilidades do pacote:
    - Carregamento do arquivo de pipeline (YAML ou JSON)
    - Validação estrutural da lista `workflows`
    - Geração de hash canônico para o event log

Limites explícitos:
    - Não resolve placeholders
    - Não consulta o Registry
    - Não executa pipeline
"""

from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    InvalidStepConfigError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config, parse_config
from .models import PipelineConfig, StepConfig

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "InvalidConfigRootTypeError",
    "InvalidStepConfigError",
    "PipelineConfig",
    "StepConfig",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "parse_config",
]
