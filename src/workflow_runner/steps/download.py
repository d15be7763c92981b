"""Step `download`: baixa uma URL para um arquivo local.

Parâmetros:
- `url`: origem (obrigatório)
- `path`: destino; vazio → último segmento do path da URL no diretório atual

Saída:
- `path`: caminho do arquivo gravado

O corpo é gravado em um arquivo temporário no mesmo diretório e movido
para `path` somente ao final; uma falha no meio do stream não deixa
arquivo truncado.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, Dict
from urllib.parse import unquote, urlparse

import requests

from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import build_session, required

URL = "url"
PATH = "path"

CHUNK_SIZE = 64 * 1024
FALLBACK_NAME = "download"


def default_target(url: str) -> Path:
    name = Path(unquote(urlparse(url).path)).name
    return Path(name or FALLBACK_NAME)


def _stream_to(target: Path, response: requests.Response) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
        os.replace(tmp_name, target)
    except BaseException:
        os.unlink(tmp_name)
        raise


@dataclass
class DownloadStep(Step):
    type_name: ClassVar[str] = "download"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(parameters=(URL, PATH), outputs=(PATH,))

    session_factory: Callable[[], requests.Session] = build_session

    def execute(self, payload: Payload) -> Dict[str, str]:
        url = required(payload, URL, self.type_name)
        raw_path = payload.parameter(PATH).strip()
        target = Path(raw_path).expanduser() if raw_path else default_target(url)
        target.parent.mkdir(parents=True, exist_ok=True)

        with self.session_factory() as session:
            with session.get(url, stream=True) as response:
                response.raise_for_status()
                _stream_to(target, response)

        return {PATH: str(target)}
