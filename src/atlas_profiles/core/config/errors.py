# src/atlas_profiles/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Profiles.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, merge e validação dos settings da store de perfis
(diretório home, nomes de arquivos, whitelist padrão).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de settings são falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa erro de perfil ou de I/O de conteúdo

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende da ProfileStore
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados aos settings do Atlas Profiles.

    Permite captura genérica de falhas de configuração, distinta das
    falhas da store de perfis (`AtlasProfilesException`).
    """


class ConfigNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de settings explicitamente
    informado não existe.

    Decisões arquiteturais:
        - Um caminho de defaults informado é obrigatório
        - Overrides locais ausentes são tolerados pelo loader
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de settings não é suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de settings
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"default_valid": ["dns"]}
        - override: {"default_valid": "dns"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingsError(ConfigError):
    """Settings resolvidos possuem chave desconhecida ou valor de tipo inválido."""
