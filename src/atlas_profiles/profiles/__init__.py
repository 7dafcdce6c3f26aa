"""
Perfis: modelo de item, overlays, ProfileStore e resolver de ativação.
"""

from .activation import ActivationSnapshot
from .item import ItemExtra, ItemOption, ProfileItem, SelectedProxy
from .overlay import Overlay
from .store import ConfigPatch, ProfileStore

__all__ = [
    "ActivationSnapshot",
    "ConfigPatch",
    "ItemExtra",
    "ItemOption",
    "Overlay",
    "ProfileItem",
    "ProfileStore",
    "SelectedProxy",
]
