# src/workflow_runner/__init__.py
"""
workflow_runner — runner declarativo de pipelines lineares de Steps.

Um arquivo de configuração descreve uma lista ordenada de Steps (HTTP,
processos, downloads, descompactação, echo, gist, WeChat). O runner os
executa em sequência, propagando a saída de cada Step para os parâmetros
do próximo por meio de placeholders `${NOME}`.

Arquitetura em alto nível:
    - core.config       → carregamento e validação do arquivo de pipeline
    - core.pipeline     → contrato de Step, RunContext, Resolver e Registry
    - core.engine       → execução linear fail-fast
    - core.traceability → event log da run
    - steps             → Steps concretos e registry padrão
    - cli               → entrada de linha de comando (`workflows`)
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
