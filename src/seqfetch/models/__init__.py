"""Domain models."""

from .molecule import (
    DEFAULT_MOLECULE_TYPE,
    MoleculeType,
    MoleculeTypeResolution,
    resolve_molecule_type,
)

__all__ = [
    "DEFAULT_MOLECULE_TYPE",
    "MoleculeType",
    "MoleculeTypeResolution",
    "resolve_molecule_type",
]
