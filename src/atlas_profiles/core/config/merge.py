# src/atlas_profiles/core/config/merge.py
"""
Utilitário canônico de deep-merge de settings.

Este módulo implementa a política de deep-merge utilizada pelo Atlas
Profiles para resolver os settings efetivos a partir dos defaults
embutidos, de um arquivo de defaults opcional e de overrides locais.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None no override → sobrescrita direta (desliga o valor)
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas

Limites explícitos:
    - Não carrega arquivos
    - Não realiza coerção de tipos
    - Não é usado para combinar documentos de perfil (isso é do engine downstream)
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de settings.

    Decisões arquiteturais:
        - O merge é puramente funcional (inputs não são mutados)
        - Listas são sempre substituídas por inteiro
        - `None` em qualquer lado não gera conflito de tipo

    Args:
        base (Dict[str, Any]): Settings base (ex.: defaults embutidos).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Novo dicionário resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list) and isinstance(base_value, (list, type(None))):
            result[key] = deepcopy(override_value)
            continue

        if base_value is not None and override_value is not None:
            if type(base_value) is not type(override_value):
                raise ConfigTypeConflictError(
                    f"Conflito de tipo na chave '{key}': "
                    f"{type(base_value).__name__} vs {type(override_value).__name__}"
                )

        # escalar -> sobrescrita
        result[key] = deepcopy(override_value)

    return result
