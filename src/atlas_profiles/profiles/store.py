# src/atlas_profiles/profiles/store.py
"""
ProfileStore — coleção canônica de perfis, perfil ativo e chain.

A store é dona exclusiva de `items` e mantém coerentes entre si:

    - current → uid do perfil ativo (ou None)
    - chain   → uids de overlays aplicados, em ordem, sobre o ativo
    - valid   → whitelist de campos autoritativos do engine downstream
    - items   → todos os perfis, em ordem de inserção (o primeiro é o fallback)

Contrato de persistência:
    - Toda operação de CRUD termina com uma chamada explícita a `save()`,
      que reescreve o documento inteiro através da porta `ProfilesIO`
    - `patch_config` não persiste: o chamador decide quando chamar `save()`
    - Arquivos de conteúdo são sempre escritos antes do documento da store
    - Nenhuma operação falha depois de ter persistido parcialmente

Concorrência:
    - Um único escritor; não há lock interno. Chamadores que compartilham a
      store entre threads devem serializar o acesso externamente.
"""

from __future__ import annotations

import logging
from collections import deque
from copy import deepcopy
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Mapping, Optional, Union

from atlas_profiles.core.config.settings import DEFAULT_SETTINGS, ProfileSettings
from atlas_profiles.core.exceptions import (
    ProfileDocumentError,
    ProfileFileIOError,
    ProfileItemInvalid,
    ProfileNotFound,
)
from atlas_profiles.persistence.port import ProfilesIO
from atlas_profiles.persistence.yaml_io import YamlProfilesIO

from .activation import ActivationSnapshot, gen_activate, gen_current
from .ids import LEGACY_UID_PREFIX, generate_id
from .item import PATCHABLE_FIELDS, ProfileItem


logger = logging.getLogger(__name__)

DEFAULT_HEADER: str = DEFAULT_SETTINGS["header_comment"]

# eventos mais antigos são descartados além deste limite
EVENT_LOG_LIMIT = 256

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class ConfigPatch:
    """Parcial aceito por `patch_config`; campos None não alteram nada."""

    current: Optional[str] = None
    chain: Optional[List[str]] = None
    valid: Optional[List[str]] = None


def _optional_str_list(data: Dict[str, Any], key: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ProfileDocumentError(
            message=f"'{key}' deve ser lista de strings",
            details={"field": key, "received": type(value).__name__},
        )
    return list(value)


@dataclass
class ProfileStore:
    """
    Store de perfis com persistência de documento inteiro.

    Campos canônicos:
    - io: porta de persistência (injetada; fake em memória nos testes)
    - current, chain, valid, items: estado persistido
    - header: comentário fixo no topo do documento
    - events: log estruturado dos últimos `EVENT_LOG_LIMIT` eventos (não persistido)
    """

    io: ProfilesIO = field(repr=False, compare=False)
    current: Optional[str] = None
    chain: Optional[List[str]] = None
    valid: Optional[List[str]] = None
    items: Optional[List[ProfileItem]] = None

    header: str = field(default=DEFAULT_HEADER, repr=False, compare=False)
    events: Deque[Dict[str, Any]] = field(
        default_factory=lambda: deque(maxlen=EVENT_LOG_LIMIT), repr=False, compare=False
    )

    # -----------------------------
    # Construção
    # -----------------------------
    @classmethod
    def template(
        cls,
        io: ProfilesIO,
        *,
        header: str = DEFAULT_HEADER,
        default_valid: Optional[List[str]] = None,
    ) -> "ProfileStore":
        """Store vazia: sem perfil ativo, `valid = ["dns"]`, `items = []`."""
        valid = list(default_valid) if default_valid is not None else ["dns"]
        return cls(io=io, valid=valid, items=[], header=header)

    @classmethod
    def load(
        cls,
        io: ProfilesIO,
        *,
        header: str = DEFAULT_HEADER,
        default_valid: Optional[List[str]] = None,
    ) -> "ProfileStore":
        """
        Carrega a store a partir da porta.

        Qualquer falha de leitura (arquivo ausente, YAML inválido, registros
        malformados) é registrada e substituída por `template()`; esta função
        nunca levanta por causa do documento.

        Após um load bem-sucedido, `items` ausente vira `[]` e itens sem `uid`
        recebem um uid gerado com prefixo `d`. Um uid existente nunca é
        regenerado.
        """
        try:
            data = io.read_structured(io.profiles_path())
            store = cls.from_dict(data, io=io, header=header)
        except (ProfileDocumentError, ProfileFileIOError, OSError) as exc:
            store = cls.template(io, header=header, default_valid=default_valid)
            store._log(
                level="error",
                event_type="store_load_failed",
                message=str(exc),
                error=type(exc).__name__,
            )
            return store

        if store.items is None:
            store.items = []

        for item in store.items:
            if item.uid is None:
                item.uid = generate_id(LEGACY_UID_PREFIX)
                store._log(
                    level="info",
                    event_type="store_migrated_uid",
                    message=f"uid gerado para item legado \"{item.name}\"",
                    uid=item.uid,
                )

        return store

    @classmethod
    def open(cls, settings: ProfileSettings) -> "ProfileStore":
        """Atalho: carrega a store do filesystem descrito por `settings`."""
        return cls.load(
            YamlProfilesIO(settings=settings),
            header=settings.header_comment,
            default_valid=settings.default_valid,
        )

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "chain": None if self.chain is None else list(self.chain),
            "valid": None if self.valid is None else list(self.valid),
            "items": None if self.items is None else [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        *,
        io: ProfilesIO,
        header: str = DEFAULT_HEADER,
    ) -> "ProfileStore":
        current = data.get("current")
        if current is not None and not isinstance(current, str):
            raise ProfileDocumentError(
                message="'current' deve ser string",
                details={"field": "current", "received": type(current).__name__},
            )

        raw_items = data.get("items")
        if raw_items is not None and not isinstance(raw_items, list):
            raise ProfileDocumentError(
                message="'items' deve ser lista",
                details={"field": "items", "received": type(raw_items).__name__},
            )

        try:
            items = None if raw_items is None else [ProfileItem.from_dict(i) for i in raw_items]
        except (TypeError, ValueError) as exc:
            raise ProfileDocumentError(
                message=f"Item malformado no documento: {exc}",
                details={"field": "items"},
            ) from exc

        return cls(
            io=io,
            current=current,
            chain=_optional_str_list(data, "chain"),
            valid=_optional_str_list(data, "valid"),
            items=items,
            header=header,
        )

    def save(self) -> None:
        """Reescreve o documento inteiro da store."""
        self.io.write_structured(self.io.profiles_path(), self.to_dict(), self.header)
        self._log(level="debug", event_type="store_saved", message="profiles document saved")

    # -----------------------------
    # Config: current / chain / valid
    # -----------------------------
    def patch_config(self, patch: Union[ConfigPatch, "ProfileStore", Mapping[str, Any]]) -> None:
        """
        Altera apenas `current`, `chain` e `valid`; `items` do parcial é ignorado.

        - current: aplicado somente se existir item com esse uid
        - chain / valid: quando presentes, substituem o valor inteiro
        """
        if isinstance(patch, Mapping):
            patch = ConfigPatch(
                current=patch.get("current"),
                chain=patch.get("chain"),
                valid=patch.get("valid"),
            )

        if self.items is None:
            self.items = []

        changed = []

        if patch.current is not None:
            if any(item.uid == patch.current for item in self.items):
                self.current = patch.current
                changed.append("current")

        if patch.chain is not None:
            self.chain = list(patch.chain)
            changed.append("chain")

        if patch.valid is not None:
            self.valid = list(patch.valid)
            changed.append("valid")

        if changed:
            self._log(
                level="info",
                event_type="config_patched",
                message=f"config patched: {', '.join(changed)}",
                fields=changed,
            )

    def get_current(self) -> Optional[str]:
        return self.current

    # -----------------------------
    # Items
    # -----------------------------
    def get_items(self) -> Optional[List[ProfileItem]]:
        return self.items

    def get_item(self, uid: str) -> ProfileItem:
        for item in self.items or []:
            if item.uid == uid:
                return item
        raise ProfileNotFound(
            message=f"Perfil não encontrado \"uid:{uid}\"",
            details={"uid": uid},
        )

    def append_item(self, item: ProfileItem) -> None:
        """
        Adiciona um item ao fim da coleção e persiste.

        Se o item trouxer `file_data`, o conteúdo é gravado em
        `<profiles_dir>/<file>` e removido do registro antes de armazená-lo.

        Raises:
            ProfileItemInvalid: `uid` ausente, ou `file` ausente com `file_data`.
            ProfileFileIOError: Falha ao gravar o arquivo de conteúdo.
        """
        if item.uid is None:
            raise ProfileItemInvalid(
                message="O uid do perfil não pode ser nulo",
                details={"field": "uid", "name": item.name},
            )

        if item.file_data is not None:
            if item.file is None:
                raise ProfileItemInvalid(
                    message="O file do perfil não pode ser nulo",
                    details={"field": "file", "uid": item.uid},
                )
            self._write_content(item.file, item.file_data, operation="create")

        if self.items is None:
            self.items = []

        self.items.append(replace(item, file_data=None))
        self._log(level="info", event_type="item_appended", message=f"perfil adicionado \"uid:{item.uid}\"", uid=item.uid)
        self.save()

    def patch_item(self, uid: str, partial: ProfileItem) -> None:
        """
        Sobrescreve, no item `uid`, cada campo de `PATCHABLE_FIELDS` presente
        em `partial`. Campos ausentes no parcial nunca apagam valores.

        Raises:
            ProfileNotFound: Nenhum item com esse uid; a store não é alterada.
        """
        for item in self.items or []:
            if item.uid == uid:
                patched = []
                for name in PATCHABLE_FIELDS:
                    value = getattr(partial, name)
                    if value is not None:
                        setattr(item, name, deepcopy(value))
                        patched.append(name)

                self._log(level="info", event_type="item_patched", message=f"perfil alterado \"uid:{uid}\"", uid=uid, fields=patched)
                self.save()
                return

        raise ProfileNotFound(
            message=f"Perfil não encontrado \"uid:{uid}\"",
            details={"uid": uid},
        )

    def update_item(self, uid: str, partial: ProfileItem) -> None:
        """
        Atualização de perfil remoto: sobrescreve `extra` e `updated` e,
        se houver `file_data`, reescreve o conteúdo.

        O nome do arquivo segue a ordem: `file` já gravado → `partial.file`
        → `"<uid>.yaml"`. A store é sempre persistida ao final.

        Raises:
            ProfileNotFound: Nenhum item com esse uid.
            ProfileFileIOError: Falha ao gravar o conteúdo (item não alterado).
        """
        if self.items is None:
            self.items = []

        self.get_item(uid)

        for item in self.items:
            if item.uid == uid:
                if partial.file_data is not None:
                    file = item.file or partial.file or f"{uid}.yaml"
                    self._write_content(file, partial.file_data, operation="write")
                    item.file = file

                item.extra = deepcopy(partial.extra)
                item.updated = partial.updated
                self._log(level="info", event_type="item_updated", message=f"perfil atualizado \"uid:{uid}\"", uid=uid)
                break

        self.save()

    def delete_item(self, uid: str) -> bool:
        """
        Remove o primeiro item com `uid` e seu arquivo de conteúdo (best-effort).

        Se o item removido era o ativo (ou não havia ativo), o novo `current`
        passa a ser o primeiro item restante, ou None.

        Returns:
            bool: True se `uid` era o perfil ativo.
        """
        current = self.current if self.current is not None else uid

        items = self.items if self.items is not None else []
        index = next((i for i, item in enumerate(items) if item.uid == uid), None)

        if index is not None:
            removed = items.pop(index)
            if removed.file is not None:
                self._remove_content(removed.file)
            self._log(level="info", event_type="item_deleted", message=f"perfil removido \"uid:{uid}\"", uid=uid)

        if current == uid:
            self.current = items[0].uid if items else None

        self.items = items
        self.save()
        return current == uid

    # -----------------------------
    # Ativação
    # -----------------------------
    def gen_current(self) -> Dict[str, Any]:
        return gen_current(self)

    def gen_activate(self) -> ActivationSnapshot:
        return gen_activate(self)

    # -----------------------------
    # Internals
    # -----------------------------
    def _write_content(self, file: str, content: str, *, operation: str) -> None:
        try:
            path = self.io.profiles_dir() / file
            self.io.write_text(path, content)
        except ProfileFileIOError as exc:
            raise ProfileFileIOError(
                message=exc.message,
                details={**exc.details, "file": file, "operation": operation},
                hint=exc.hint,
            ) from exc
        except OSError as exc:
            raise ProfileFileIOError(
                message=f"Falha ao gravar o arquivo \"{file}\"",
                details={"file": file, "operation": operation, "reason": str(exc)},
            ) from exc

    def _remove_content(self, file: str) -> None:
        try:
            path = self.io.profiles_dir() / file
            if self.io.exists(path):
                self.io.remove_file(path)
        except OSError as exc:
            self._log(
                level="warning",
                event_type="file_cleanup_failed",
                message=f"Falha ao remover o arquivo \"{file}\": {exc}",
                file=file,
            )

    def _log(self, *, level: str, event_type: str, message: str, **extra: Any) -> None:
        event = {
            "event_type": event_type,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        logger.log(_LEVELS[level], "%s: %s", event_type, message)


__all__ = ["ConfigPatch", "DEFAULT_HEADER", "EVENT_LOG_LIMIT", "ProfileStore"]
