"""
Atlas Profiles — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros da store de perfis.
Erros são artefatos serializáveis, entregues a UIs e chamadores externos
sem depender da hierarquia de exceções Python.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProfilesErrorPayload:
    """
    Payload canônico de erro do Atlas Profiles.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Documento da store
PROFILE_DOCUMENT_INVALID = "PROFILE_DOCUMENT_INVALID"

# Itens
PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
PROFILE_ITEM_INVALID = "PROFILE_ITEM_INVALID"

# Arquivos de conteúdo
PROFILE_FILE_IO = "PROFILE_FILE_IO"

# Ativação
CURRENT_PROFILE_UNRESOLVED = "CURRENT_PROFILE_UNRESOLVED"
