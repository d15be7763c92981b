"""Step `wechat`: envia uma mensagem de texto via webhook de robô do WeCom.

Parâmetros:
- `key`: chave do webhook do robô de grupo (obrigatório)
- `content`: texto da mensagem (obrigatório)

Sem saídas. `errcode` diferente de zero na resposta falha a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict

import requests

from workflow_runner.core.exceptions import StepExecutionError
from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import build_session, required

KEY = "key"
CONTENT = "content"

WEBHOOK_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send"


@dataclass
class WeChatStep(Step):
    type_name: ClassVar[str] = "wechat"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(parameters=(KEY, CONTENT), outputs=())

    webhook_url: str = WEBHOOK_URL
    session_factory: Callable[[], requests.Session] = build_session

    def execute(self, payload: Payload) -> Dict[str, str]:
        key = required(payload, KEY, self.type_name)
        content = required(payload, CONTENT, self.type_name)

        with self.session_factory() as session:
            response = session.post(
                self.webhook_url,
                params={KEY: key},
                json={"msgtype": "text", "text": {"content": content}},
            )
            response.raise_for_status()
            data = response.json()

        errcode = data.get("errcode", 0) if isinstance(data, dict) else 0
        if errcode != 0:
            raise StepExecutionError(
                message=f"WeChat webhook rejected the message: {data.get('errmsg', errcode)}",
                details={"errcode": errcode, "errmsg": data.get("errmsg")},
                hint="Confira a chave do webhook e o conteúdo da mensagem.",
            )
        return {}
