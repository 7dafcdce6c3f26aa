# tests/core/profiles/test_activation.py
"""
Testes do resolver de ativação (gen_current / gen_activate).

Os testes asseguram que:
- sem perfil ativo o snapshot é vazio (estado quiescente válido)
- o documento do perfil ativo é lido com chaves `<<` achatadas
- `current` pendurado é erro apenas no momento da ativação
- a chain é best-effort: ids não resolvidos ou não convertíveis são
  descartados, preservando a ordem dos demais
- a ativação nunca muta nem persiste a store

Limites explícitos:
    - Não valida a semântica dos overlays (responsabilidade do engine)
"""

import pytest

from atlas_profiles.core.exceptions import CurrentProfileUnresolved, ProfileItemInvalid
from atlas_profiles.profiles.activation import ActivationSnapshot
from atlas_profiles.profiles.overlay import Overlay, item_to_overlay
from atlas_profiles.profiles.store import ConfigPatch


def _put(memory_io, file, content):
    memory_io.files[memory_io.profiles_dir() / file] = content


def test_no_current_gives_empty_snapshot(store):
    """
    Verifica o snapshot de uma store sem perfil ativo.

    Invariantes:
        - `current == {}` e `chain == []`
        - `valid` é cópia da whitelist armazenada
    """
    snapshot = store.gen_activate()

    assert snapshot.current == {}
    assert snapshot.chain == []
    assert snapshot.valid == ["dns"]
    snapshot.valid.append("tun")
    assert store.valid == ["dns"]


def test_unset_valid_defaults_to_empty(store):
    store.valid = None
    assert store.gen_activate().valid == []


def test_unset_items_gives_empty_current(memory_io):
    from atlas_profiles.profiles.store import ProfileStore

    store = ProfileStore(io=memory_io, current="l1", items=None)
    assert store.gen_current() == {}


def test_current_document_is_read_and_flattened(store, memory_io, make_item):
    store.append_item(
        make_item(
            "l1",
            file="l1.yaml",
            file_data="base: &b\n  port: 7890\nmode: rule\nproxy:\n  <<: *b\n  name: hk\n",
        )
    )
    store.patch_config(ConfigPatch(current="l1"))

    current = store.gen_current()

    assert current["mode"] == "rule"
    assert current["proxy"] == {"port": 7890, "name": "hk"}


def test_current_without_file_is_error(store, make_item):
    store.append_item(make_item("l1"))
    store.patch_config(ConfigPatch(current="l1"))

    with pytest.raises(ProfileItemInvalid) as exc_info:
        store.gen_current()
    assert exc_info.value.details["field"] == "file"


def test_dangling_current_is_error_only_at_activation(store, make_item):
    store.append_item(make_item("l1", file="l1.yaml", file_data="mode: rule\n"))
    # referência pendurada introduzida fora do contrato de mutação
    store.current = "removed"

    with pytest.raises(CurrentProfileUnresolved) as exc_info:
        store.gen_activate()
    assert exc_info.value.details == {"uid": "removed"}
    assert exc_info.value.to_payload().type == "CURRENT_PROFILE_UNRESOLVED"


def test_chain_drops_unresolvable_ids_in_order(store, memory_io, make_item):
    """
    Verifica a resolução best-effort da chain.

    Invariantes:
        - Um id resolvível e um inexistente → chain de tamanho 1
        - A ordem listada é preservada entre os resolvíveis
    """
    store.append_item(make_item("s1", itype="script", file="s1.js", file_data="function main(c) { return c }"))
    store.append_item(make_item("m1", itype="merge", file="m1.yaml", file_data="rules: []\n"))

    store.patch_config(ConfigPatch(chain=["ghost", "m1"]))
    snapshot = store.gen_activate()
    assert snapshot.chain == [Overlay(uid="m1", kind="merge", data={"rules": []})]

    store.patch_config(ConfigPatch(chain=["m1", "ghost", "s1"]))
    snapshot = store.gen_activate()
    assert [o.uid for o in snapshot.chain] == ["m1", "s1"]
    assert snapshot.chain[1].kind == "script"
    assert snapshot.chain[1].data == "function main(c) { return c }"


def test_chain_drops_non_convertible_items(store, memory_io, make_item):
    store.append_item(make_item("l1", itype="local", file="l1.yaml", file_data="mode: rule\n"))
    store.append_item(make_item("m-nofile", itype="merge"))
    store.append_item(make_item("m-missing", itype="merge", file="gone.yaml"))
    store.append_item(make_item("m-bad", itype="merge", file="bad.yaml", file_data="- not\n- a mapping\n"))
    store.append_item(make_item("m-ok", itype="merge", file="ok.yaml", file_data="a: 1\n"))

    store.patch_config(ConfigPatch(chain=["l1", "m-nofile", "m-missing", "m-bad", "m-ok"]))

    assert [o.uid for o in store.gen_activate().chain] == ["m-ok"]


def test_activation_does_not_mutate_or_persist(store, memory_io, make_item):
    store.append_item(make_item("l1", file="l1.yaml", file_data="mode: rule\n"))
    store.patch_config(ConfigPatch(current="l1", chain=["ghost"]))
    before = store.to_dict()
    writes = memory_io.structured_writes

    store.gen_activate()

    assert store.to_dict() == before
    assert memory_io.structured_writes == writes


def test_item_to_overlay_requires_type_and_file(memory_io, make_item):
    _put(memory_io, "m1.yaml", "a: 1\n")
    assert item_to_overlay(make_item("m1", itype=None, file="m1.yaml"), memory_io) is None
    assert item_to_overlay(make_item("m1", itype="merge"), memory_io) is None
    assert item_to_overlay(make_item("m1", itype="merge", file="m1.yaml"), memory_io) == Overlay(
        uid="m1", kind="merge", data={"a": 1}
    )


def test_snapshot_fingerprint_tracks_content(store, memory_io, make_item):
    store.append_item(make_item("l1", file="l1.yaml", file_data="mode: rule\n"))
    store.patch_config(ConfigPatch(current="l1"))

    first = store.gen_activate()
    again = store.gen_activate()
    assert first.fingerprint() == again.fingerprint()

    store.update_item("l1", make_item("l1", file_data="mode: global\n"))
    changed = store.gen_activate()
    assert changed.fingerprint() != first.fingerprint()
    assert changed.to_dict() == {"current": {"mode": "global"}, "chain": [], "valid": ["dns"]}


def test_empty_snapshot_defaults():
    snapshot = ActivationSnapshot()
    assert snapshot.to_dict() == {"current": {}, "chain": [], "valid": []}


def test_chain_drops_undecodable_overlay(tmp_path):
    from atlas_profiles.core.config.settings import ProfileSettings
    from atlas_profiles.profiles.item import ProfileItem
    from atlas_profiles.profiles.store import ProfileStore

    store = ProfileStore.open(ProfileSettings(home_dir=tmp_path))
    store.append_item(ProfileItem(uid="m1", itype="merge", file="m1.yaml", file_data="a: 1\n"))
    store.append_item(ProfileItem(uid="s1", itype="script", file="s1.js", file_data="main\n"))
    store.append_item(ProfileItem(uid="m2", itype="merge", file="m2.yaml", file_data="b: 2\n"))
    (tmp_path / "profiles" / "m1.yaml").write_bytes(b"a: \xff\n")
    (tmp_path / "profiles" / "s1.js").write_bytes(b"\xfe\xff")

    store.patch_config(ConfigPatch(chain=["m1", "s1", "m2"]))
    snapshot = store.gen_activate()

    assert snapshot.chain == [Overlay(uid="m2", kind="merge", data={"b": 2})]
