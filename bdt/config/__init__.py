from __future__ import annotations

from .load import load_config, load_gate_settings, load_properties, load_resolver_settings
from .model import BdtConfig, GateSettings, GateVocabulary, ResolverSettings, KNOWN_FAMILIES
from .paths import cfg_root, CFG_DIR, CFG_DIR_ENV

__all__ = [
    "load_config",
    "load_gate_settings",
    "load_properties",
    "load_resolver_settings",
    "BdtConfig",
    "GateSettings",
    "GateVocabulary",
    "ResolverSettings",
    "KNOWN_FAMILIES",
    "cfg_root",
    "CFG_DIR",
    "CFG_DIR_ENV",
]
