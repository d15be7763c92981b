# src/workflow_runner/core/pipeline/resolver.py
"""
Resolução de placeholders em parâmetros de Steps.

Sintaxe (v1):
    - `${NOME}` referencia uma variável; NOME casa `[A-Za-z_][A-Za-z0-9_]*`
    - `$$` produz um `$` literal
    - `$` seguido de qualquer outro caractere é texto literal
    - `${` sem fechamento ou com nome inválido é erro

Política de lookup:
    Os tiers do RunContext são consultados na ordem de
    `RunContext.tier_order` (por padrão: saída do Step anterior, depois
    ambiente). A primeira ocorrência vence.

Invariantes:
    - String sem `$` é devolvida inalterada
    - Substituição é puramente textual; valores substituídos não são
      re-resolvidos, mesmo que contenham `${...}`
    - Variável ausente em todos os tiers aborta a resolução; nunca há
      substituição parcial
"""

from __future__ import annotations

import re
from typing import List, Mapping, Sequence, Tuple

from workflow_runner.core.exceptions import MalformedPlaceholderError, UnresolvedVariableError

from .context import RunContext


_TOKEN = re.compile(
    r"""
    \$(?:
        (?P<escaped>\$)                          |  # $$ -> $
        \{(?P<named>[A-Za-z_][A-Za-z0-9_]*)\}    |  # ${NAME}
        (?P<invalid>\{)                             # ${ sem nome válido/fechamento
    )
    """,
    re.VERBOSE,
)


def _malformed(raw: str, position: int) -> MalformedPlaceholderError:
    return MalformedPlaceholderError(
        message=f"Malformed placeholder at position {position}.",
        details={"raw": raw, "position": position},
        hint="Use `${NOME}` para referenciar variáveis e `$$` para um `$` literal.",
    )


def find_placeholders(raw: str) -> List[str]:
    """Nomes referenciados em `raw`, na ordem em que aparecem (com repetições)."""
    names: List[str] = []
    for match in _TOKEN.finditer(raw):
        if match.group("invalid") is not None:
            raise _malformed(raw, match.start())
        if match.group("named") is not None:
            names.append(match.group("named"))
    return names


def lookup(name: str, tiers: Sequence[Tuple[str, Mapping[str, str]]], *, raw: str = "") -> str:
    for _, values in tiers:
        if name in values:
            return values[name]
    raise UnresolvedVariableError(
        message=f"Variable '{name}' is not defined.",
        details={"name": name, "raw": raw, "tiers": [tier for tier, _ in tiers]},
        hint="Exporte a variável de ambiente ou garanta que o Step anterior a produza como saída.",
    )


def resolve(raw: str, context: RunContext) -> str:
    """
    Resolve todos os placeholders de `raw` contra os tiers do contexto.

    Args:
        raw (str): Valor bruto declarado na configuração.
        context (RunContext): Contexto da run (somente leitura aqui).

    Returns:
        str: Valor concreto.

    Raises:
        UnresolvedVariableError: Se alguma variável não existir em nenhum tier.
        MalformedPlaceholderError: Se houver `${` inválido.
    """
    if "$" not in raw:
        return raw

    tiers = context.tiers()
    parts: List[str] = []
    cursor = 0
    for match in _TOKEN.finditer(raw):
        parts.append(raw[cursor:match.start()])
        cursor = match.end()

        if match.group("escaped") is not None:
            parts.append("$")
        elif match.group("named") is not None:
            parts.append(lookup(match.group("named"), tiers, raw=raw))
        else:
            raise _malformed(raw, match.start())

    parts.append(raw[cursor:])
    return "".join(parts)
