# src/workflow_runner/core/traceability/event_log.py
"""
Event log da run em JSON.

O RunContext acumula eventos estruturados (`run started`, `step started`,
`step finished`, `step failed`, ...). Este módulo materializa esses
eventos em disco para auditoria posterior.

Formato (v1):

    {
      "run_id": "...",
      "created_at": "2026-01-16T00:00:00+00:00",
      "status": "succeeded" | "failed",
      "events": [ {...}, ... ]
    }

Limites explícitos:
    - Não inclui valores de parâmetros (podem conter segredos)
    - Não é chamado implicitamente pelo Engine
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from workflow_runner.core.pipeline.context import RunContext


def save_event_log(
    ctx: RunContext,
    path: Union[str, Path],
    *,
    status: Optional[str] = None,
) -> Path:
    """Grava o event log do contexto em `path` (diretórios pais são criados)."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    document: Dict[str, Any] = {
        "run_id": ctx.run_id,
        "created_at": ctx.created_at.isoformat(),
        "status": status,
        "events": list(ctx.events),
    }
    target.write_text(
        json.dumps(document, ensure_ascii=False, indent=2, default=str),
        encoding="utf-8",
    )
    return target

