"""Step `echo`: imprime `text` e o devolve como saída."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, TextIO

from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

TEXT = "text"


@dataclass
class EchoStep(Step):
    """Valor fixo: útil para depurar resolução e semear variáveis."""

    type_name: ClassVar[str] = "echo"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(parameters=(TEXT,), outputs=(TEXT,))

    stream: Optional[TextIO] = None

    def execute(self, payload: Payload) -> Dict[str, str]:
        text = payload.parameter(TEXT)
        print(text, file=self.stream)
        return {TEXT: text}
