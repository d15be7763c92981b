# src/workflow_runner/core/config/errors.py
"""
Exceções canônicas da camada de configuração do workflow_runner.

As exceções aqui definidas representam **erros de startup**: arquivo
ausente, formato não suportado, conteúdo malformado. Todas são fatais e
ocorrem antes de qualquer Step executar.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de lookup, resolução ou execução

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine, Pipeline ou CLI
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do pipeline.

    Permite captura genérica de erros de startup pela CLI, distinta das
    falhas de execução reportadas pelo Engine.
    """


class ConfigNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração não existe
    (ou não é um arquivo regular) no caminho informado.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class ConfigParseError(ConfigError):
    """Exceção levantada quando o conteúdo não é YAML/JSON sintaticamente válido."""


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração não é um
    dicionário (`dict`) com a chave `workflows` contendo uma lista.
    """


class InvalidStepConfigError(ConfigError):
    """
    Exceção levantada quando uma entrada de `workflows` é inválida:
    sem `type`, `parameters` que não é mapa, ou valor de parâmetro que não
    é escalar.
    """
