# src/atlas_profiles/profiles/activation.py
"""
Resolver de ativação da ProfileStore.

Transforma o estado da store em um `ActivationSnapshot` pronto para o
engine downstream:

    - current → mapeamento do documento do perfil ativo
    - chain   → overlays resolvidos, na ordem listada
    - valid   → cópia da whitelist de campos autoritativos

Decisões arquiteturais:
    - A resolução nunca muta a store
    - "Nenhum perfil ativo" é estado válido e produz `current` vazio
    - `current` apontando para item removido é erro (`CurrentProfileUnresolved`)
    - A chain é best-effort: ids não resolvidos ou não convertíveis são
      descartados silenciosamente, preservando a ordem dos demais
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from atlas_profiles.core.config.hashing import compute_config_hash
from atlas_profiles.core.exceptions import (
    CurrentProfileUnresolved,
    ProfileItemInvalid,
    ProfileNotFound,
)

from .overlay import Overlay, item_to_overlay

if TYPE_CHECKING:  # pragma: no cover
    from .store import ProfileStore


@dataclass(frozen=True)
class ActivationSnapshot:
    """Snapshot resolvido (não persistido) entregue ao engine downstream."""

    current: Dict[str, Any] = field(default_factory=dict)
    chain: List[Overlay] = field(default_factory=list)
    valid: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "chain": [o.to_dict() for o in self.chain],
            "valid": list(self.valid),
        }

    def fingerprint(self) -> str:
        """Hash canônico do snapshot; muda somente se o conteúdo mudar."""
        return compute_config_hash(self.to_dict())


def gen_current(store: "ProfileStore") -> Dict[str, Any]:
    """
    Gera o mapeamento do perfil ativo.

    Returns:
        Dict[str, Any]: Documento achatado do perfil ativo, ou `{}` se
        `current` ou `items` não estiverem definidos.

    Raises:
        ProfileItemInvalid: Se o item ativo não tiver `file`.
        CurrentProfileUnresolved: Se nenhum item tiver o uid de `current`.
    """
    if store.current is None or store.items is None:
        return {}

    current = store.current
    for item in store.items:
        if item.uid == current:
            if item.file is None:
                raise ProfileItemInvalid(
                    message=f"Perfil ativo \"uid:{current}\" não possui o campo file",
                    details={"uid": current, "field": "file"},
                )
            path = store.io.profiles_dir() / item.file
            return store.io.read_merge_mapping(path)

    raise CurrentProfileUnresolved(
        message=f"Perfil ativo não encontrado \"uid:{current}\"",
        details={"uid": current},
        hint="Selecione outro perfil via patch_config(current=...) ou remova a referência.",
    )


def gen_activate(store: "ProfileStore") -> ActivationSnapshot:
    """Compõe `gen_current` com a resolução best-effort da chain."""
    current = gen_current(store)

    chain: List[Overlay] = []
    for uid in store.chain or []:
        try:
            item = store.get_item(uid)
        except ProfileNotFound:
            continue
        overlay = item_to_overlay(item, store.io)
        if overlay is not None:
            chain.append(overlay)

    valid = list(store.valid) if store.valid is not None else []

    return ActivationSnapshot(current=current, chain=chain, valid=valid)


__all__ = ["ActivationSnapshot", "gen_activate", "gen_current"]
