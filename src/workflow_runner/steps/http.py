"""Step `http`: uma requisição HTTP.

Saídas:
- `status_code`: código HTTP como string
- `text`: corpo da resposta decodificado

Respostas 4xx/5xx NÃO são falha do Step: o código é propagado para que
Steps seguintes decidam. Erros de transporte (DNS, conexão, URL inválida)
falham a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict

import requests

from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import build_session, required

URL = "url"
METHOD = "method"

STATUS_CODE = "status_code"
TEXT = "text"

DEFAULT_METHOD = "GET"


@dataclass
class HttpStep(Step):
    type_name: ClassVar[str] = "http"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(
        parameters=(URL, METHOD),
        outputs=(STATUS_CODE, TEXT),
    )

    session_factory: Callable[[], requests.Session] = build_session

    def execute(self, payload: Payload) -> Dict[str, str]:
        url = required(payload, URL, self.type_name)
        method = (payload.parameter(METHOD).strip() or DEFAULT_METHOD).upper()

        with self.session_factory() as session:
            response = session.request(method, url)

        return {
            STATUS_CODE: str(response.status_code),
            TEXT: response.text,
        }
