"""
Entrypoint de linha de comando: `workflows CONFIG`.

Códigos de saída:
    - 0: todos os Steps concluídos
    - 1: falha de lookup, resolução ou execução (`Error:` e `Hint:` em stderr)
    - 2: erro de startup (argumentos ou arquivo de configuração)

O progresso por Step vai para stderr; stdout fica livre para os Steps.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from workflow_runner.core.config import ConfigError, load_config
from workflow_runner.core.engine import Engine, RunResult
from workflow_runner.core.pipeline.context import RunContext
from workflow_runner.core.pipeline.registry import StepRegistry
from workflow_runner.core.pipeline.types import StepResult, StepStatus
from workflow_runner.core.traceability import save_event_log
from workflow_runner.steps import build_default_registry


def build_parser() -> argparse.ArgumentParser:
    """Cria o parser da CLI."""
    parser = argparse.ArgumentParser(
        prog="workflows",
        description="Executa um pipeline declarativo de Steps",
    )
    parser.add_argument("config", type=str, help="Caminho do arquivo de pipeline (YAML ou JSON)")
    parser.add_argument(
        "--events-out",
        type=str,
        default=None,
        help="Grava o event log estruturado da run neste arquivo JSON",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Não imprime o progresso por Step em stderr",
    )
    return parser


def _progress(result: StepResult) -> None:
    mark = "ok" if result.status == StepStatus.SUCCESS else "FAILED"
    print(f"[{result.index}] {result.type_name}: {mark}", file=sys.stderr)


def _report_failure(result: RunResult) -> None:
    error = result.error
    if error is None:
        return
    print(f"Error: {error.message}", file=sys.stderr)
    if error.hint:
        print(f"Hint: {error.hint}", file=sys.stderr)


def main(argv: Optional[List[str]] = None, *, registry: Optional[StepRegistry] = None) -> int:
    """Entrypoint da CLI; devolve o código de saída."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(2, f"Error: {exc}\n")

    ctx = RunContext.create()
    engine = Engine(
        config=config,
        registry=registry if registry is not None else build_default_registry(),
        ctx=ctx,
        on_step=None if args.quiet else _progress,
    )
    result = engine.run()

    if args.events_out:
        save_event_log(ctx, args.events_out, status=result.status.value)

    if not result.ok:
        _report_failure(result)
        return 1
    return 0
