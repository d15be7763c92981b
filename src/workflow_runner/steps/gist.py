"""Step `gist`: publica um snippet como GitHub Gist.

Parâmetros:
- `token`: token da API do GitHub com escopo `gist` (obrigatório)
- `content`: conteúdo do arquivo (obrigatório)
- `filename`: nome do arquivo no gist (default `workflow.txt`)
- `description`: descrição do gist
- `public`: `true` → gist público (default secreto)

Saída:
- `url`: `html_url` do gist criado
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict

import requests

from workflow_runner.core.exceptions import StepExecutionError
from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import build_session, parse_bool, required

TOKEN = "token"
FILENAME = "filename"
CONTENT = "content"
DESCRIPTION = "description"
PUBLIC = "public"

URL = "url"

GITHUB_GISTS_URL = "https://api.github.com/gists"
DEFAULT_FILENAME = "workflow.txt"


@dataclass
class GistStep(Step):
    type_name: ClassVar[str] = "gist"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(
        parameters=(TOKEN, FILENAME, CONTENT, DESCRIPTION, PUBLIC),
        outputs=(URL,),
    )

    api_url: str = GITHUB_GISTS_URL
    session_factory: Callable[[], requests.Session] = build_session

    def _body(self, payload: Payload) -> Dict[str, Any]:
        filename = payload.parameter(FILENAME).strip() or DEFAULT_FILENAME
        return {
            "description": payload.parameter(DESCRIPTION),
            "public": parse_bool(payload.parameter(PUBLIC)),
            "files": {filename: {"content": required(payload, CONTENT, self.type_name)}},
        }

    def execute(self, payload: Payload) -> Dict[str, str]:
        token = required(payload, TOKEN, self.type_name)
        body = self._body(payload)

        with self.session_factory() as session:
            response = session.post(
                self.api_url,
                json=body,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/vnd.github+json",
                },
            )
            response.raise_for_status()
            data = response.json()

        html_url = data.get("html_url") if isinstance(data, dict) else None
        if not html_url:
            raise StepExecutionError(
                message="GitHub response has no html_url",
                details={"status_code": response.status_code},
            )
        return {URL: str(html_url)}
