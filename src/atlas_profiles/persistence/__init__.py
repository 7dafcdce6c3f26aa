"""Persistência da store de perfis: porta abstrata e implementação YAML."""

from .port import ProfilesIO
from .yaml_io import YamlProfilesIO

__all__ = ["ProfilesIO", "YamlProfilesIO"]
