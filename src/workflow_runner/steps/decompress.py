"""Step `decompress`: expande um arquivo compactado.

Formatos: `.zip`, `.tar`, `.tar.gz`/`.tgz`, `.tar.bz2`/`.tbz2`,
`.tar.xz`/`.txz` e `.gz` (arquivo único).

Parâmetros:
- `path`: arquivo compactado (obrigatório)
- `destination`: diretório de saída; vazio → diretório do arquivo

Saída:
- `destination`: diretório onde o conteúdo foi expandido

Membros cujo caminho escaparia de `destination` (ex.: `../x`, absolutos,
links para fora) fazem o Step falhar antes de qualquer extração.
"""

from __future__ import annotations

import gzip
import os
import shutil
import tarfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Iterable

from workflow_runner.core.exceptions import StepExecutionError
from workflow_runner.core.pipeline.step import Step
from workflow_runner.core.pipeline.types import Payload, StepDescriptor

from .common import required

PATH = "path"
DESTINATION = "destination"

_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")


def _unsafe(archive: Path, destination: Path, names: Iterable[str]) -> None:
    root = destination.resolve()
    for name in names:
        target = (root / name).resolve()
        if target != root and root not in target.parents:
            raise StepExecutionError(
                message=f"Archive member escapes destination: {name}",
                details={"archive": str(archive), "member": name, "destination": str(root)},
                hint="Inspecione o arquivo: membros com caminhos absolutos ou `..` não são extraídos.",
            )


def _link_target(member: tarfile.TarInfo) -> str:
    # hard links são relativos à raiz do arquivo; symlinks, ao diretório do membro
    if member.islnk():
        return member.linkname
    return os.path.join(os.path.dirname(member.name), member.linkname)


def _extract_zip(archive: Path, destination: Path) -> None:
    with zipfile.ZipFile(archive) as zf:
        _unsafe(archive, destination, zf.namelist())
        zf.extractall(destination)


def _extract_tar(archive: Path, destination: Path) -> None:
    with tarfile.open(archive) as tf:
        members = tf.getmembers()
        _unsafe(archive, destination, [m.name for m in members])
        _unsafe(
            archive,
            destination,
            [_link_target(m) for m in members if m.issym() or m.islnk()],
        )
        if hasattr(tarfile, "data_filter"):
            tf.extractall(destination, filter="data")
        else:  # pragma: no cover - Python sem extraction filters
            tf.extractall(destination)


def _extract_gzip(archive: Path, destination: Path) -> None:
    target = destination / archive.stem
    with gzip.open(archive, "rb") as src, target.open("wb") as dst:
        shutil.copyfileobj(src, dst)


@dataclass
class DecompressStep(Step):
    type_name: ClassVar[str] = "decompress"
    descriptor: ClassVar[StepDescriptor] = StepDescriptor(
        parameters=(PATH, DESTINATION),
        outputs=(DESTINATION,),
    )

    def execute(self, payload: Payload) -> Dict[str, str]:
        archive = Path(required(payload, PATH, self.type_name)).expanduser()
        if not archive.is_file():
            raise FileNotFoundError(f"File not found: {archive}")

        raw_dest = payload.parameter(DESTINATION).strip()
        destination = Path(raw_dest).expanduser() if raw_dest else archive.parent
        destination.mkdir(parents=True, exist_ok=True)

        name = archive.name.lower()
        if name.endswith(".zip"):
            _extract_zip(archive, destination)
        elif name.endswith(_TAR_SUFFIXES):
            _extract_tar(archive, destination)
        elif name.endswith(".gz"):
            _extract_gzip(archive, destination)
        else:
            raise StepExecutionError(
                message=f"Unsupported archive format: {archive.name}",
                details={"path": str(archive)},
                hint="Formatos suportados: .zip, .tar, .tar.gz, .tgz, .tar.bz2, .tar.xz, .gz",
            )

        return {DESTINATION: str(destination)}
