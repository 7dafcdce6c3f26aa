"""
Atlas Profiles — Canonical Exceptions (v1)

Este módulo define exceções tipadas da store de perfis.

Objetivo:
- Permitir que a store e o resolver de ativação levantem exceções semânticas
- Facilitar o mapeamento determinístico para ProfilesErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Estado da store nunca é alterado antes de uma exceção de validação.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from . import errors
from .errors import ProfilesErrorPayload


@dataclass(frozen=True)
class AtlasProfilesException(Exception):
    """Base class para exceções da store.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    code: ClassVar[str] = "ATLAS_PROFILES_ERROR"

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> ProfilesErrorPayload:
        return ProfilesErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Documento da store
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProfileDocumentError(AtlasProfilesException):
    """Documento da store ausente, ilegível ou com estrutura inválida."""

    code: ClassVar[str] = errors.PROFILE_DOCUMENT_INVALID


# ---------------------------------------------------------------------------
# Itens
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProfileNotFound(AtlasProfilesException):
    """Nenhum item da store possui o uid informado."""

    code: ClassVar[str] = errors.PROFILE_NOT_FOUND


@dataclass(frozen=True)
class ProfileItemInvalid(AtlasProfilesException):
    """Item viola um campo obrigatório (uid, ou file quando há conteúdo)."""

    code: ClassVar[str] = errors.PROFILE_ITEM_INVALID


@dataclass(frozen=True)
class ProfileFileIOError(AtlasProfilesException):
    """Falha ao criar, escrever ou ler um arquivo de conteúdo de perfil."""

    code: ClassVar[str] = errors.PROFILE_FILE_IO


# ---------------------------------------------------------------------------
# Ativação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurrentProfileUnresolved(AtlasProfilesException):
    """`current` aponta para um uid que não existe mais em `items`."""

    code: ClassVar[str] = errors.CURRENT_PROFILE_UNRESOLVED
