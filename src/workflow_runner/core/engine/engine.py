# src/workflow_runner/core/engine/engine.py
"""
Engine de execução do pipeline do workflow_runner.

Algoritmo (por StepConfig, na ordem declarada):
    1. Lookup do Step no Registry pelo `type` (case-insensitive)
    2. Resolução de cada parâmetro declarado em `step.parameters()` que
       esteja presente na configuração (ausentes são omitidos do payload)
    3. `step.execute(payload)`
    4. `last_output` é substituído integralmente pela saída (stringificada)
    5. Próximo Step; sem Steps restantes, a run termina com SUCCEEDED

Política de falhas:
    - Fail-fast sempre: lookup, resolução ou execução encerram a run
    - Sem retry, sem rollback, sem execução de Steps posteriores
    - Exceções são convertidas em WorkflowErrorPayload (serializável)
      e registradas no StepResult e no event log
    - Efeitos colaterais de Steps já concluídos permanecem

Máquina de estados:
    Pending → Resolving(i) → Executing(i) → (Resolving(i+1) | Succeeded | Failed)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from workflow_runner.core.config.hashing import compute_config_hash
from workflow_runner.core.config.models import PipelineConfig, StepConfig
from workflow_runner.core.errors import (
    WorkflowErrorPayload,
    engine_execution_error,
    placeholder_malformed,
    step_execution_error,
    step_type_not_found,
    variable_not_found,
)
from workflow_runner.core.exceptions import (
    MalformedPlaceholderError,
    StepExecutionError,
    UndeclaredOutputError,
    UnknownStepTypeError,
    UnresolvedVariableError,
)
from workflow_runner.core.pipeline.context import RunContext
from workflow_runner.core.pipeline.registry import StepRegistry
from workflow_runner.core.pipeline.resolver import find_placeholders, resolve
from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, RunStatus, StepResult, StepStatus


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run (RunResult v1)."""

    run_id: str
    status: RunStatus
    steps: Tuple[StepResult, ...] = ()
    outputs: Dict[str, str] = field(default_factory=dict)
    error: Optional[WorkflowErrorPayload] = None
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    def raise_for_status(self) -> None:
        """Relança a exceção original da primeira falha, se houver."""
        if self.exception is not None:
            raise self.exception


def _referenced(raw: str) -> List[str]:
    # nomes citados em `raw`, para diagnóstico; vazio se houver `${` inválido adiante
    try:
        return find_placeholders(raw)
    except MalformedPlaceholderError:
        return []


class _StepFailure(Exception):
    def __init__(self, payload: WorkflowErrorPayload, cause: BaseException) -> None:
        super().__init__(payload.message)
        self.payload = payload
        self.cause = cause


class Engine:
    """Orquestrador canônico do workflow_runner (pipeline linear)."""

    def __init__(
        self,
        *,
        config: PipelineConfig,
        registry: StepRegistry,
        ctx: RunContext,
        on_step: Optional[Callable[[StepResult], None]] = None,
    ):
        self.config = config
        self.registry = registry
        self.ctx = ctx
        self.on_step = on_step

    # ------------------------------------------------------------------
    # Fases de um Step
    # ------------------------------------------------------------------
    def _lookup(self, index: int, step_cfg: StepConfig) -> Step:
        try:
            return self.registry.get(step_cfg.type_name)
        except UnknownStepTypeError as e:
            raise _StepFailure(
                step_type_not_found(
                    type_name=step_cfg.type_name,
                    supported=list(self.registry.supported_types()),
                    step_index=index,
                ),
                e,
            ) from e

    def _resolve_parameters(self, index: int, step: Step, step_cfg: StepConfig) -> Payload:
        resolved: Dict[str, str] = {}
        for name in step.parameters():
            if name not in step_cfg.raw_parameters:
                continue
            raw = step_cfg.raw_parameters[name]
            try:
                resolved[name] = resolve(raw, self.ctx)
            except UnresolvedVariableError as e:
                raise _StepFailure(
                    variable_not_found(
                        name=str(e.details.get("name")),
                        raw=raw,
                        tiers=list(e.details.get("tiers", [])),
                        referenced=_referenced(raw),
                        parameter=name,
                        step_index=index,
                    ),
                    e,
                ) from e
            except MalformedPlaceholderError as e:
                raise _StepFailure(
                    placeholder_malformed(
                        raw=raw,
                        position=int(e.details.get("position", -1)),
                        parameter=name,
                        step_index=index,
                    ),
                    e,
                ) from e
        return Payload(resolved)

    def _check_outputs(self, step: Step, outputs: Any) -> Dict[str, str]:
        if outputs is None:
            return {}
        if not isinstance(outputs, Mapping):
            raise StepExecutionError(
                message="Step.execute must return a mapping",
                details={"received": type(outputs).__name__},
                hint="Ajuste o Step para devolver um mapa de saídas",
            )
        declared = set(step.outputs())
        undeclared = sorted(str(k) for k in outputs if k not in declared)
        if undeclared:
            raise UndeclaredOutputError(
                message=f"Step returned undeclared outputs: {', '.join(undeclared)}",
                details={"undeclared": undeclared, "declared": sorted(declared)},
                hint="Declare as saídas no StepDescriptor ou remova-as do retorno",
            )
        return {str(k): "" if v is None else str(v) for k, v in outputs.items()}

    def _execute(self, index: int, type_name: str, step: Step, payload: Payload) -> Dict[str, str]:
        try:
            return self._check_outputs(step, step.execute(payload))
        except Exception as e:
            error = step_execution_error(
                type_name=type_name,
                step_index=index,
                exc_type=e.__class__.__name__,
                exc_message=str(e) or None,
            )
            if isinstance(e, StepExecutionError) and e.hint:
                error = replace(error, hint=e.hint)
            raise _StepFailure(error, e) from e

    def _run_step(self, index: int, step_cfg: StepConfig) -> StepResult:
        type_name = step_cfg.type_name.lower()
        step = self._lookup(index, step_cfg)
        payload = self._resolve_parameters(index, step, step_cfg)

        self.ctx.log(
            step=index,
            level="info",
            message="step started",
            type=type_name,
            parameters=sorted(payload),
        )
        outputs = self._execute(index, type_name, step, payload)
        self.ctx.replace_output(outputs)
        self.ctx.log(
            step=index,
            level="info",
            message="step finished",
            type=type_name,
            outputs=sorted(outputs),
        )

        return StepResult(
            index=index,
            type_name=type_name,
            status=StepStatus.SUCCESS,
            summary="ok",
            parameters=payload.to_dict(),
            outputs=dict(self.ctx.last_output),
        )

    def _notify(self, result: StepResult) -> None:
        if self.on_step is not None:
            self.on_step(result)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self) -> RunResult:
        self.ctx.log(
            step=None,
            level="info",
            message="run started",
            config_source=self.config.source,
            config_hash=compute_config_hash(self.config.to_dict()),
            steps=len(self.config),
        )

        results: List[StepResult] = []
        for index, step_cfg in enumerate(self.config):
            try:
                result = self._run_step(index, step_cfg)
            except _StepFailure as failure:
                return self._fail(results, index, step_cfg, failure.payload, failure.cause)
            except Exception as e:
                # falha do próprio Engine (ex.: parameters() inválido)
                payload = engine_execution_error(
                    step_index=index,
                    exc_type=e.__class__.__name__,
                    exc_message=str(e) or None,
                )
                return self._fail(results, index, step_cfg, payload, e)

            results.append(result)
            self._notify(result)

        self.ctx.log(step=None, level="info", message="run succeeded", steps=len(results))
        return RunResult(
            run_id=self.ctx.run_id,
            status=RunStatus.SUCCEEDED,
            steps=tuple(results),
            outputs=dict(self.ctx.last_output),
        )

    def _fail(
        self,
        results: List[StepResult],
        index: int,
        step_cfg: StepConfig,
        payload: WorkflowErrorPayload,
        cause: BaseException,
    ) -> RunResult:
        failed = StepResult(
            index=index,
            type_name=step_cfg.type_name.lower(),
            status=StepStatus.FAILED,
            summary=payload.message,
            error=payload.to_dict(),
        )
        results.append(failed)
        self._notify(failed)

        self.ctx.log(
            step=index,
            level="error",
            message="step failed",
            type=failed.type_name,
            error=payload.to_dict(),
        )
        self.ctx.log(step=None, level="error", message="run failed", steps=len(results))

        return RunResult(
            run_id=self.ctx.run_id,
            status=RunStatus.FAILED,
            steps=tuple(results),
            outputs=dict(self.ctx.last_output),
            error=payload,
            exception=cause,
        )
