"""Geração de uids de perfis."""

from __future__ import annotations

import uuid

# Prefixo reservado para uids gerados na migração de documentos antigos.
LEGACY_UID_PREFIX = "d"

UID_LENGTH = 11


def generate_id(prefix: str) -> str:
    """Retorna `prefix` seguido de 11 caracteres hexadecimais aleatórios."""
    return f"{prefix}{uuid.uuid4().hex[:UID_LENGTH]}"
