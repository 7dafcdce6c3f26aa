# src/atlas_profiles/__init__.py
"""
Atlas Profiles — store em camadas de perfis de configuração.

Este pacote raiz define o namespace público do Atlas Profiles: uma coleção
de documentos de configuração nomeados (perfis), o perfil ativo
(`current`), uma cadeia ordenada de overlays (`chain`) aplicada sobre ele e
uma whitelist de campos autoritativos (`valid`). Tudo isso é resolvido em
um snapshot de ativação consumido por um engine downstream.

Arquitetura em alto nível:
    - core.config   → settings (home, nomes de arquivos, whitelist padrão)
    - profiles      → modelo de item, overlays, ProfileStore e resolver de ativação
    - persistence   → porta de persistência e implementação YAML (PyYAML)

Limites explícitos:
    - Não interpreta o conteúdo dos documentos de perfil além das chaves
    - Não executa o engine downstream
    - Não contém CLI ou UI
"""
# src/atlas_profiles/__init__.py
from .core.config import ProfileSettings, resolve_settings
from .persistence import ProfilesIO, YamlProfilesIO
from .profiles import ActivationSnapshot, Overlay, ProfileItem, ProfileStore

__all__ = [
    "ActivationSnapshot",
    "Overlay",
    "ProfileItem",
    "ProfileSettings",
    "ProfileStore",
    "ProfilesIO",
    "YamlProfilesIO",
    "resolve_settings",
]
