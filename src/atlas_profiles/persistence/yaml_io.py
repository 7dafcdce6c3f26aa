"""Persistência YAML da ProfileStore (v1).

Implementação concreta de `ProfilesIO` sobre o filesystem local, usando
PyYAML para o documento da store e para os documentos de perfil.

Decisões (v1):
- Formato: YAML (`yaml.safe_load` / `yaml.safe_dump`)
- Documento da store: `<home_dir>/<profiles_file>`, reescrito por inteiro
- Conteúdo dos perfis: `<home_dir>/<profiles_dirname>/<file>`, diretório plano
- Cabeçalho: comentário fixo seguido de linha em branco; linhas sem `#`
  recebem o prefixo `# `
- Conteúdo que não é UTF-8 vira `ProfileDocumentError`
- Chaves de merge (`<<`) são achatadas pelo próprio loader do PyYAML

Limites explícitos:
- Não valida o schema do documento da store (isso é da ProfileStore)
- Não interpreta documentos de perfil além do tipo raiz
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from atlas_profiles.core.config.settings import ProfileSettings
from atlas_profiles.core.exceptions import ProfileDocumentError, ProfileFileIOError


class YamlProfilesIO:
    """Porta de persistência (v1) baseada em arquivos YAML."""

    def __init__(self, *, settings: ProfileSettings):
        self.settings = settings

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    def profiles_path(self) -> Path:
        return self.settings.profiles_path

    def profiles_dir(self) -> Path:
        """Retorna o diretório de conteúdo, criando-o se necessário."""
        path = self.settings.profiles_dir
        path.mkdir(parents=True, exist_ok=True)
        return path

    # ------------------------------------------------------------------
    # Documento estruturado
    # ------------------------------------------------------------------
    def read_structured(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ProfileDocumentError(
                message=f"Documento não encontrado: {path}",
                details={"path": str(path)},
            )
        return self._load_mapping(path)

    def write_structured(self, path: Path, data: Dict[str, Any], header: Optional[str] = None) -> None:
        body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        text = f"{_as_comment(header)}\n\n{body}" if header else body
        self.write_text(path, text)

    def read_merge_mapping(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ProfileFileIOError(
                message=f"Arquivo de perfil não encontrado: \"{path.name}\"",
                details={"file": path.name, "operation": "read"},
            )
        return self._load_mapping(path)

    # ------------------------------------------------------------------
    # Arquivos de conteúdo
    # ------------------------------------------------------------------
    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ProfileDocumentError(
                message=f"Arquivo \"{path.name}\" não é UTF-8 válido",
                details={"path": str(path), "reason": str(exc)},
            ) from exc
        except OSError as exc:
            raise ProfileFileIOError(
                message=f"Falha ao ler o arquivo \"{path.name}\"",
                details={"file": path.name, "operation": "read", "reason": str(exc)},
            ) from exc

    def write_text(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(content)
        except OSError as exc:
            raise ProfileFileIOError(
                message=f"Falha ao escrever no arquivo \"{path.name}\"",
                details={"file": path.name, "operation": "write", "reason": str(exc)},
            ) from exc

    def remove_file(self, path: Path) -> None:
        path.unlink()

    def exists(self, path: Path) -> bool:
        return path.exists()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load_mapping(self, path: Path) -> Dict[str, Any]:
        text = self.read_text(path)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProfileDocumentError(
                message=f"YAML inválido em \"{path.name}\"",
                details={"path": str(path), "reason": str(exc)},
            ) from exc

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ProfileDocumentError(
                message=f"Raiz de \"{path.name}\" deve ser mapeamento, recebido: {type(data).__name__}",
                details={"path": str(path), "root_type": type(data).__name__},
            )

        return data


def _as_comment(header: str) -> str:
    # toda linha do cabeçalho sai como comentário YAML
    lines = header.splitlines() or [""]
    return "\n".join(line if line.lstrip().startswith("#") else f"# {line}".rstrip() for line in lines)


__all__ = ["YamlProfilesIO"]
