# src/atlas_profiles/profiles/overlay.py
"""
Overlay — unidade da chain aplicada sobre o perfil ativo.

Um overlay é derivado de um ProfileItem cujo tipo é aplicável à chain:

    - `merge`  → `data` é o mapeamento (YAML achatado) a ser mesclado
    - `script` → `data` é o código-fonte bruto do script

O conteúdo é opaco para a store: quem interpreta merge e script é o
engine downstream. Itens de outros tipos (`local`, `remote`) não são
convertíveis e ficam fora da chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from atlas_profiles.core.exceptions import AtlasProfilesException
from atlas_profiles.persistence.port import ProfilesIO

from .item import ProfileItem


OVERLAY_MERGE = "merge"
OVERLAY_SCRIPT = "script"


@dataclass(frozen=True)
class Overlay:
    uid: str
    kind: str
    data: Union[Dict[str, Any], str]

    def to_dict(self) -> Dict[str, Any]:
        return {"uid": self.uid, "kind": self.kind, "data": self.data}


def item_to_overlay(item: ProfileItem, io: ProfilesIO) -> Optional[Overlay]:
    """
    Converte um item em overlay, ou retorna None se não for aplicável.

    Regras:
        - `itype` e `file` são obrigatórios
        - o arquivo de conteúdo precisa existir
        - falhas de leitura ou parse descartam o item (retorno None)
    """
    if item.itype is None or item.file is None:
        return None

    path = io.profiles_dir() / item.file
    if not io.exists(path):
        return None

    uid = item.uid or ""
    try:
        if item.itype == OVERLAY_SCRIPT:
            return Overlay(uid=uid, kind=OVERLAY_SCRIPT, data=io.read_text(path))
        if item.itype == OVERLAY_MERGE:
            return Overlay(uid=uid, kind=OVERLAY_MERGE, data=io.read_merge_mapping(path))
    except AtlasProfilesException:
        return None

    return None


__all__ = ["OVERLAY_MERGE", "OVERLAY_SCRIPT", "Overlay", "item_to_overlay"]
