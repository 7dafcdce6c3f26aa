# src/atlas_profiles/core/config/settings.py
"""
Settings efetivos da store de perfis.

Precedência (da menor para a maior):
    1. `DEFAULT_SETTINGS` embutido
    2. arquivo de settings (`config_path`) + override local (`local_path`)
    3. variável de ambiente `ATLAS_PROFILES_HOME` (apenas `home_dir`)
    4. argumento explícito `home_dir`
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import InvalidSettingsError
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge


HOME_ENV_VAR = "ATLAS_PROFILES_HOME"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "home_dir": "~/.atlas-profiles",
    "profiles_file": "profiles.yaml",
    "profiles_dirname": "profiles",
    "header_comment": "# Profiles Config for Clash Verge",
    "default_valid": ["dns"],
}


@dataclass(frozen=True)
class ProfileSettings:
    """Settings resolvidos e validados da store."""

    home_dir: Path
    profiles_file: str = "profiles.yaml"
    profiles_dirname: str = "profiles"
    header_comment: str = "# Profiles Config for Clash Verge"
    default_valid: List[str] = field(default_factory=lambda: ["dns"])

    @property
    def profiles_path(self) -> Path:
        """Caminho do documento da store (`profiles.yaml`)."""
        return self.home_dir / self.profiles_file

    @property
    def profiles_dir(self) -> Path:
        """Diretório plano dos arquivos de conteúdo dos perfis."""
        return self.home_dir / self.profiles_dirname

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home_dir": str(self.home_dir),
            "profiles_file": self.profiles_file,
            "profiles_dirname": self.profiles_dirname,
            "header_comment": self.header_comment,
            "default_valid": list(self.default_valid),
        }


def _validate(raw: Dict[str, Any]) -> ProfileSettings:
    unknown = sorted(set(raw) - set(DEFAULT_SETTINGS))
    if unknown:
        raise InvalidSettingsError(f"Chaves de settings desconhecidas: {unknown}")

    for key in ("home_dir", "profiles_file", "profiles_dirname", "header_comment"):
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            raise InvalidSettingsError(
                f"Setting '{key}' deve ser string não vazia, recebido: {value!r}"
            )

    valid = raw.get("default_valid")
    if not isinstance(valid, list) or not all(isinstance(v, str) for v in valid):
        raise InvalidSettingsError(
            f"Setting 'default_valid' deve ser lista de strings, recebido: {valid!r}"
        )

    return ProfileSettings(
        home_dir=Path(raw["home_dir"]).expanduser(),
        profiles_file=raw["profiles_file"],
        profiles_dirname=raw["profiles_dirname"],
        header_comment=raw["header_comment"],
        default_valid=list(valid),
    )


def resolve_settings(
    *,
    config_path: Optional[str] = None,
    local_path: Optional[str] = None,
    home_dir: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProfileSettings:
    """
    Resolve os settings efetivos da store.

    Args:
        config_path: Arquivo de settings (YAML/JSON). Obrigatório existir se informado.
        local_path: Override local opcional, aplicado sobre `config_path`.
        home_dir: Override explícito do diretório home.
        environ: Ambiente consultado (default: `os.environ`).

    Returns:
        ProfileSettings: Settings validados.

    Raises:
        ConfigError: Qualquer subclasse, em caso de arquivo ausente, formato
            inválido, conflito de tipo no merge ou valor inválido.
    """
    env = os.environ if environ is None else environ

    effective = dict(DEFAULT_SETTINGS)
    if config_path is not None:
        effective = deep_merge(
            effective, load_config(defaults_path=config_path, local_path=local_path)
        )

    if env.get(HOME_ENV_VAR):
        effective["home_dir"] = env[HOME_ENV_VAR]

    if home_dir is not None:
        effective["home_dir"] = str(home_dir)

    return _validate(effective)


def settings_hash(settings: ProfileSettings) -> str:
    """Hash canônico dos settings resolvidos."""
    return compute_config_hash(settings.to_dict())
