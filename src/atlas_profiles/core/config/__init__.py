# src/atlas_profiles/core/config/__init__.py

"""
Camada de settings do Atlas Profiles.

Este pacote carrega, mescla, valida e identifica os settings que dizem à
store de perfis onde ficam o documento `profiles.yaml` e o diretório de
conteúdo, qual o comentário de cabeçalho e qual a whitelist padrão.

Responsabilidades do pacote:
    - Carregamento de arquivos de settings (defaults + overrides locais)
    - Resolução via deep-merge determinístico
    - Validação estrutural dos settings
    - Hash canônico para rastreabilidade

Limites explícitos:
    - Não lê nem escreve o documento da store
    - Não interpreta documentos de perfil
"""

from .settings import ProfileSettings, resolve_settings, settings_hash

__all__ = ["ProfileSettings", "resolve_settings", "settings_hash"]
