# tests/conftest.py
"""
Fixtures compartilhados para testes do workflow_runner.

Este módulo define fixtures reutilizáveis que fornecem:
- um ambiente de variáveis fixo (sem depender de `os.environ`)
- um RunContext determinístico
- um Step duck-typed que registra cada invocação em um journal
- helpers para montar PipelineConfig e StepRegistry de teste

Decisões arquiteturais:
    - Steps de teste utilizam duck typing em vez de herança
    - O journal é compartilhado entre Steps para verificar ordem de execução
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Nenhuma fixture realiza I/O de rede ou processos
    - Não substituir testes dos Steps concretos
"""

import pytest
from datetime import datetime, timezone


@pytest.fixture
def env() -> dict:
    """
    Ambiente de variáveis fixo para resolução.

    Returns:
        dict: Snapshot de ambiente usado pelo RunContext de teste.
    """
    return {"HOME": "/home/runner", "GREETING": "hello", "SHARED": "from-env"}


@pytest.fixture
def ctx(env):
    """
    RunContext determinístico: `run_id` e `created_at` fixos, ambiente injetado.

    Invariantes:
        - `last_output` começa vazio
        - O ambiente não depende do processo de teste
    """
    from workflow_runner.core.pipeline.context import RunContext
    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        environment=env,
    )


@pytest.fixture
def journal() -> list:
    """Lista compartilhada onde RecordingStep registra início e fim de cada execução."""
    return []


@pytest.fixture
def RecordingStep(journal):
    """
    Fixture factory que fornece uma implementação duck-typed de Step.

    A classe retornada:
    - declara parâmetros e saídas arbitrários
    - registra `("start", type_name, payload)` e `("end", type_name)` no journal
    - produz saídas via callable `produce(payload)` ou falha com `fail`

    Returns:
        type: Classe _RecordingStep que pode ser instanciada pelos testes.
    """
    from workflow_runner.core.pipeline.types import StepDescriptor

    class _RecordingStep:
        def __init__(self, type_name, parameters=(), outputs=(), produce=None, fail=None):
            self.type_name = type_name
            self.descriptor = StepDescriptor(parameters=tuple(parameters), outputs=tuple(outputs))
            self._produce = produce
            self._fail = fail

        def parameters(self):
            return self.descriptor.parameters

        def outputs(self):
            return self.descriptor.outputs

        def execute(self, payload):
            journal.append(("start", self.type_name, payload.to_dict()))
            if self._fail is not None:
                raise self._fail
            result = self._produce(payload) if self._produce else {}
            journal.append(("end", self.type_name))
            return result

    return _RecordingStep


@pytest.fixture
def make_config():
    """Monta um PipelineConfig a partir de pares `(type, parameters)`."""
    from workflow_runner.core.config.models import PipelineConfig, StepConfig

    def _make(*entries):
        return PipelineConfig.of(
            StepConfig(type_name=type_name, raw_parameters=params or {})
            for type_name, params in entries
        )

    return _make


@pytest.fixture
def run_pipeline(ctx, make_config):
    """Executa entradas `(type, parameters)` contra os Steps dados e devolve o RunResult."""
    from workflow_runner.core.engine.engine import Engine
    from workflow_runner.core.pipeline.registry import StepRegistry

    def _run(steps, *entries):
        engine = Engine(config=make_config(*entries), registry=StepRegistry(steps), ctx=ctx)
        return engine.run()

    return _run
