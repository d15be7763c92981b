"""Steps concretos do workflow_runner e o registry padrão.

Cada Step é um wrapper fino sobre uma única chamada de biblioteca ou do
sistema operacional. O conjunto é fechado e registrado explicitamente em
`build_default_registry()`.
"""

from __future__ import annotations

from workflow_runner.core.pipeline.registry import StepRegistry

from .command import CommandStep
from .decompress import DecompressStep
from .download import DownloadStep
from .echo import EchoStep
from .gist import GistStep
from .http import HttpStep
from .wechat import WeChatStep


def build_default_registry() -> StepRegistry:
    """Registry com um Step por variante suportada."""
    return StepRegistry(
        [
            HttpStep(),
            EchoStep(),
            WeChatStep(),
            GistStep(),
            CommandStep(),
            DownloadStep(),
            DecompressStep(),
        ]
    )


__all__ = [
    "CommandStep",
    "DecompressStep",
    "DownloadStep",
    "EchoStep",
    "GistStep",
    "HttpStep",
    "WeChatStep",
    "build_default_registry",
]
