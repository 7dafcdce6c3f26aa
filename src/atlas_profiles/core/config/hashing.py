# src/atlas_profiles/core/config/hashing.py
"""
Hashing canônico de estruturas de configuração do Atlas Profiles.

O hash gerado representa a identidade estrutural de um dicionário
(settings resolvidos ou snapshot de ativação) e permite que chamadores
detectem se uma nova ativação alterou de fato a configuração entregue ao
engine downstream.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Valores não serializáveis em JSON (ex.: datas vindas de YAML) são
      convertidos via `str`
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""


import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um dicionário de configuração.

    Args:
        config (Dict[str, Any]): Estrutura a ser identificada.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
