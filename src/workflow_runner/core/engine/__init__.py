# src/workflow_runner/core/engine/__init__.py
"""
Engine do workflow_runner.

O Engine é o orquestrador central da run: percorre a lista ordenada de
StepConfig, consulta o Registry, resolve parâmetros contra o RunContext,
invoca cada Step e propaga sua saída para o próximo.

Invariantes:
    - O Step i+1 nunca inicia antes de `execute` do Step i retornar
    - Cada Step é executado no máximo uma vez por run
    - A primeira falha encerra a run (fail-fast, sem compensação)

Limites explícitos:
    - Não paraleliza nem ramifica execução
    - Não realiza retry, checkpoint ou timeout
"""

from .engine import Engine, RunResult

__all__ = ["Engine", "RunResult"]
