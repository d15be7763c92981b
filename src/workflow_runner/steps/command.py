"""Step `command`: inicia um processo externo.

Parâmetros:
- `program`: linha de comando (dividida com `shlex`, sem shell)
- `daemon`: `true` → não aguarda o término (fire-and-forget)
- `inherit_io`: `true` → stdout/stderr do processo vão para o terminal;
  caso contrário são descartados

Sem saídas. Em modo não-daemon, exit code diferente de zero falha a run.
O processo daemon fica fora da contabilidade de sucesso/falha da run.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import ClassVar, Dict

from workflow_runner.core.exceptions import StepExecutionError
from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import parse_bool, required

PROGRAM = "program"
DAEMON = "daemon"
INHERIT_IO = "inherit_io"


@dataclass
class CommandStep(Step):
    type_name: ClassVar[str] = "command"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(
        parameters=(PROGRAM, DAEMON, INHERIT_IO),
        outputs=(),
    )

    def execute(self, payload: Payload) -> Dict[str, str]:
        argv = shlex.split(required(payload, PROGRAM, self.type_name))
        daemon = parse_bool(payload.parameter(DAEMON))
        inherit_io = parse_bool(payload.parameter(INHERIT_IO))

        stream = None if inherit_io else subprocess.DEVNULL
        process = subprocess.Popen(
            argv,
            stdin=stream,
            stdout=stream,
            stderr=stream,
            start_new_session=daemon,
        )
        if daemon:
            return {}

        returncode = process.wait()
        if returncode != 0:
            raise StepExecutionError(
                message=f"Command exited with status {returncode}: {argv[0]}",
                details={"argv": argv, "returncode": returncode},
                hint="Reexecute com `inherit_io: true` para ver a saída do processo.",
            )
        return {}
