# src/atlas_profiles/profiles/item.py
"""
ProfileItem — registro de um perfil na store.

Um item carrega metadados do perfil e, apenas em requisições de criação ou
atualização, o conteúdo bruto (`file_data`). O conteúdo nunca é serializado
no documento da store: ele é gravado no próprio arquivo (`file`) dentro do
diretório de perfis.

Schema serializado (chaves ausentes são omitidas):

    uid: "l9f3k2a0c1x"
    type: local | remote | merge | script
    name: ...
    desc: ...
    file: "l9f3k2a0c1x.yaml"
    url: ...
    selected: [{name: ..., now: ...}]
    extra: {upload: 0, download: 0, total: 0, expire: 0}
    updated: 1700000000
    option: {user_agent: ..., with_proxy: ..., self_proxy: ..., update_interval: ...}

Observação: o campo Python `itype` é serializado como `type`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from atlas_profiles.core.exceptions import ProfileDocumentError


# Campos sobrescritos por `patch_item` quando presentes no parcial.
PATCHABLE_FIELDS = (
    "itype",
    "name",
    "desc",
    "file",
    "url",
    "selected",
    "extra",
    "updated",
    "option",
)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _expect_mapping(value: Any, *, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ProfileDocumentError(
            message=f"{what} deve ser mapeamento, recebido: {type(value).__name__}",
            details={"field": what, "received": type(value).__name__},
        )
    return value


@dataclass
class SelectedProxy:
    """Seleção de proxy persistida por grupo."""

    name: Optional[str] = None
    now: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"name": self.name, "now": self.now})

    @classmethod
    def from_dict(cls, data: Any) -> "SelectedProxy":
        data = _expect_mapping(data, what="selected[]")
        return cls(name=data.get("name"), now=data.get("now"))


@dataclass
class ItemExtra:
    """Informações de tráfego e expiração de uma assinatura remota."""

    upload: int = 0
    download: int = 0
    total: int = 0
    expire: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "upload": self.upload,
            "download": self.download,
            "total": self.total,
            "expire": self.expire,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ItemExtra":
        data = _expect_mapping(data, what="extra")
        return cls(
            upload=int(data.get("upload", 0) or 0),
            download=int(data.get("download", 0) or 0),
            total=int(data.get("total", 0) or 0),
            expire=int(data.get("expire", 0) or 0),
        )


@dataclass
class ItemOption:
    """Opções de atualização de um perfil remoto."""

    user_agent: Optional[str] = None
    with_proxy: Optional[bool] = None
    self_proxy: Optional[bool] = None
    update_interval: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "user_agent": self.user_agent,
                "with_proxy": self.with_proxy,
                "self_proxy": self.self_proxy,
                "update_interval": self.update_interval,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "ItemOption":
        data = _expect_mapping(data, what="option")
        return cls(
            user_agent=data.get("user_agent"),
            with_proxy=data.get("with_proxy"),
            self_proxy=data.get("self_proxy"),
            update_interval=data.get("update_interval"),
        )


@dataclass
class ProfileItem:
    """
    Registro de um perfil.

    Campos canônicos:
    - uid: identificador estável durante toda a vida do item
    - itype: tipo do perfil (`local`, `remote`, `merge`, `script`)
    - file: nome do arquivo de conteúdo, relativo ao diretório de perfis
    - updated: timestamp unix da última atualização
    - file_data: conteúdo bruto transitório (nunca persistido no documento da store)
    """

    uid: Optional[str] = None
    itype: Optional[str] = None
    name: Optional[str] = None
    desc: Optional[str] = None
    file: Optional[str] = None
    url: Optional[str] = None
    selected: Optional[List[SelectedProxy]] = None
    extra: Optional[ItemExtra] = None
    updated: Optional[int] = None
    option: Optional[ItemOption] = None

    file_data: Optional[str] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serializa o item no schema do documento da store (sem `file_data`)."""
        return _drop_none(
            {
                "uid": self.uid,
                "type": self.itype,
                "name": self.name,
                "desc": self.desc,
                "file": self.file,
                "url": self.url,
                "selected": None if self.selected is None else [s.to_dict() for s in self.selected],
                "extra": None if self.extra is None else self.extra.to_dict(),
                "updated": self.updated,
                "option": None if self.option is None else self.option.to_dict(),
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "ProfileItem":
        """Reconstrói um item a partir do documento; chaves desconhecidas são ignoradas."""
        data = _expect_mapping(data, what="items[]")

        selected = data.get("selected")
        if selected is not None:
            if not isinstance(selected, list):
                raise ProfileDocumentError(
                    message=f"selected deve ser lista, recebido: {type(selected).__name__}",
                    details={"field": "selected", "uid": data.get("uid")},
                )
            selected = [SelectedProxy.from_dict(s) for s in selected]

        extra = data.get("extra")
        option = data.get("option")
        updated = data.get("updated")

        return cls(
            uid=data.get("uid"),
            itype=data.get("type"),
            name=data.get("name"),
            desc=data.get("desc"),
            file=data.get("file"),
            url=data.get("url"),
            selected=selected,
            extra=None if extra is None else ItemExtra.from_dict(extra),
            updated=None if updated is None else int(updated),
            option=None if option is None else ItemOption.from_dict(option),
            file_data=data.get("file_data"),
        )


__all__ = [
    "PATCHABLE_FIELDS",
    "ItemExtra",
    "ItemOption",
    "ProfileItem",
    "SelectedProxy",
]
