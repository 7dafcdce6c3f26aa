"""
ProfilesIO — porta de persistência da ProfileStore.

Este módulo define a superfície mínima de I/O que a store e o resolver de
ativação podem chamar. A store não conhece PyYAML nem o filesystem: ela
fala apenas com esta porta, o que permite injetar uma implementação em
memória nos testes.

Notes
-----
- Todos os caminhos são `pathlib.Path` absolutos resolvidos pela própria porta.
- Erros de conteúdo viram `ProfileDocumentError`; erros de sistema operacional
  em escrita/leitura de conteúdo viram `ProfileFileIOError`.
- `remove_file` propaga `OSError`; a política de tolerância é da store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Protocol


class ProfilesIO(Protocol):
    """
    Persistência do documento da store e dos arquivos de conteúdo.
    """

    def profiles_path(self) -> Path:
        """
        Caminho do documento da store.

        Returns
        -------
        Path
            Arquivo com as chaves `current`, `chain`, `valid` e `items`.
        """
        raise NotImplementedError

    def profiles_dir(self) -> Path:
        """
        Diretório plano onde vivem os arquivos de conteúdo dos perfis.
        """
        raise NotImplementedError

    def read_structured(self, path: Path) -> Dict[str, Any]:
        """
        Lê um documento estruturado cuja raiz é um mapeamento.

        Raises
        ------
        ProfileDocumentError
            Se o arquivo não existir, não puder ser parseado ou a raiz não
            for um mapeamento.
        """
        raise NotImplementedError

    def write_structured(self, path: Path, data: Dict[str, Any], header: Optional[str] = None) -> None:
        """
        Reescreve por inteiro um documento estruturado, com comentário de
        cabeçalho opcional.

        Raises
        ------
        ProfileFileIOError
            Se o arquivo não puder ser escrito.
        """
        raise NotImplementedError

    def read_merge_mapping(self, path: Path) -> Dict[str, Any]:
        """
        Lê um documento de perfil e achata suas chaves de merge (`<<`).

        Raises
        ------
        ProfileDocumentError
            Conteúdo inválido ou raiz que não é mapeamento.
        ProfileFileIOError
            Arquivo inexistente ou ilegível.
        """
        raise NotImplementedError

    def read_text(self, path: Path) -> str:
        """
        Lê um arquivo de conteúdo como texto bruto (UTF-8).

        Raises
        ------
        ProfileDocumentError
            Conteúdo que não decodifica como UTF-8.
        ProfileFileIOError
            Arquivo ilegível.
        """
        raise NotImplementedError

    def write_text(self, path: Path, content: str) -> None:
        """
        Cria ou sobrescreve um arquivo de conteúdo.

        Raises
        ------
        ProfileFileIOError
            Se o arquivo não puder ser escrito.
        """
        raise NotImplementedError

    def remove_file(self, path: Path) -> None:
        """Remove um arquivo de conteúdo; `OSError` é propagado."""
        raise NotImplementedError

    def exists(self, path: Path) -> bool:
        raise NotImplementedError
