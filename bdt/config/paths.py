from __future__ import annotations

import os
from pathlib import Path

# Single source of truth for configuration directory structure.
CFG_DIR = "bdt-cfg"
CFG_DIR_ENV = "BDT_CFG_DIR"
PROPERTIES_FILE = "properties.yaml"
GATE_FILE = "gate.yaml"
RESOLVER_FILE = "resolver.yaml"


def cfg_root(root: Path) -> Path:
    """
    Absolute path to the bdt-cfg/ directory.

    BDT_CFG_DIR overrides the location (relative values are taken from root).
    """
    override = os.environ.get(CFG_DIR_ENV)
    if override:
        return (root / override).resolve()
    return (root / CFG_DIR).resolve()


def properties_path(root: Path) -> Path:
    """Path to the system properties file bdt-cfg/properties.yaml."""
    return cfg_root(root) / PROPERTIES_FILE


def gate_path(root: Path) -> Path:
    """Path to the tag vocabulary file bdt-cfg/gate.yaml."""
    return cfg_root(root) / GATE_FILE


def resolver_path(root: Path) -> Path:
    """Path to the resolver settings file bdt-cfg/resolver.yaml."""
    return cfg_root(root) / RESOLVER_FILE
