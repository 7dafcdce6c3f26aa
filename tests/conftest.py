# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Profiles.

Este módulo define fixtures reutilizáveis que fornecem:
- YAMLs de settings (defaults + override local) semelhantes ao uso real
- uma porta `ProfilesIO` em memória, para testar a ProfileStore sem disco
- itens de perfil mínimos e determinísticos

Decisões arquiteturais:
    - A store recebe a porta por injeção; testes do core não tocam o filesystem
    - Testes de `YamlProfilesIO` usam `tmp_path` explicitamente
    - Fixtures retornam objetos novos a cada teste (sem estado compartilhado)

Limites explícitos:
    - A porta em memória não simula permissões nem locks de arquivo
    - Falhas de I/O são injetadas explicitamente via `fail_writes` / `fail_removes`
"""

from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import yaml


class InMemoryProfilesIO:
    """
    Implementação de `ProfilesIO` mantida inteiramente em memória.

    - `files` mapeia caminho → conteúdo textual
    - `structured_writes` conta quantas vezes o documento da store foi gravado
    - `fail_writes` / `fail_removes` contêm nomes de arquivos que devem falhar
    """

    def __init__(self, root: Path = Path("/virtual/home")):
        self.root = root
        self.files: Dict[Path, str] = {}
        self.documents: Dict[Path, Dict[str, Any]] = {}
        self.structured_writes = 0
        self.fail_writes: set = set()
        self.fail_removes: set = set()

    def profiles_path(self) -> Path:
        return self.root / "profiles.yaml"

    def profiles_dir(self) -> Path:
        return self.root / "profiles"

    def read_structured(self, path: Path) -> Dict[str, Any]:
        from atlas_profiles.core.exceptions import ProfileDocumentError

        if path not in self.documents:
            raise ProfileDocumentError(message=f"Documento não encontrado: {path}", details={"path": str(path)})
        return yaml.safe_load(yaml.safe_dump(self.documents[path]))

    def write_structured(self, path: Path, data: Dict[str, Any], header: Optional[str] = None) -> None:
        # round-trip por YAML para pegar valores não serializáveis
        self.documents[path] = yaml.safe_load(yaml.safe_dump(data))
        self.structured_writes += 1

    def read_merge_mapping(self, path: Path) -> Dict[str, Any]:
        from atlas_profiles.core.exceptions import ProfileDocumentError, ProfileFileIOError

        if path not in self.files:
            raise ProfileFileIOError(message=f"ausente: {path.name}", details={"file": path.name, "operation": "read"})
        data = yaml.safe_load(self.read_text(path)) or {}
        if not isinstance(data, dict):
            raise ProfileDocumentError(message="raiz inválida", details={"path": str(path)})
        return data

    def read_text(self, path: Path) -> str:
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        from atlas_profiles.core.exceptions import ProfileFileIOError

        if path.name in self.fail_writes:
            raise ProfileFileIOError(
                message=f"Falha ao escrever no arquivo \"{path.name}\"",
                details={"file": path.name, "operation": "write", "reason": "disk full"},
            )
        self.files[path] = content

    def remove_file(self, path: Path) -> None:
        if path.name in self.fail_removes:
            raise PermissionError(f"locked: {path.name}")
        del self.files[path]

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.documents


@pytest.fixture
def memory_io() -> InMemoryProfilesIO:
    """Porta de persistência em memória, vazia (sem documento da store)."""
    return InMemoryProfilesIO()


@pytest.fixture
def store(memory_io):
    """ProfileStore vazia carregada a partir de uma porta sem documento (template)."""
    from atlas_profiles.profiles.store import ProfileStore

    return ProfileStore.load(memory_io)


@pytest.fixture
def make_item():
    """
    Factory de ProfileItem mínimo.

    Returns:
        Callable[..., ProfileItem]: `make_item(uid, **campos)`.
    """
    from atlas_profiles.profiles.item import ProfileItem

    def _make(uid: Optional[str] = "l0001", **kwargs: Any) -> ProfileItem:
        kwargs.setdefault("itype", "local")
        kwargs.setdefault("name", f"profile {uid}")
        return ProfileItem(uid=uid, **kwargs)

    return _make


# =====================================================
# Settings fixtures
# =====================================================

@pytest.fixture
def settings_defaults_yaml() -> str:
    """
    YAML de settings base, semelhante a um `atlas-profiles.yaml` real.

    Returns:
        str: Conteúdo YAML com home, cabeçalho e whitelist padrão.
    """
    return """\
home_dir: /srv/atlas
header_comment: "# Profiles Config"
default_valid:
  - dns
  - tun
"""


@pytest.fixture
def settings_local_yaml() -> str:
    """YAML de override local: troca apenas a whitelist."""
    return """\
default_valid:
  - dns
"""
