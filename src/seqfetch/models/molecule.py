"""Molecule types and how each one maps onto an Entrez efetch query."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MoleculeType(str, Enum):
    """Kind of record requested from NCBI."""
    NUCLEOTIDE = "nucleotide"
    PROTEIN = "protein"

    @property
    def database(self) -> str:
        """Entrez `db` selector."""
        return _EFETCH_FORMATS[self][0]

    @property
    def rettype(self) -> str:
        """Entrez `rettype` for the record format we store."""
        return _EFETCH_FORMATS[self][1]

    @property
    def extension(self) -> str:
        """File extension of the stored record."""
        return _EFETCH_FORMATS[self][2]


# db, rettype, extension
_EFETCH_FORMATS: dict[MoleculeType, tuple[str, str, str]] = {
    MoleculeType.NUCLEOTIDE: ("nucleotide", "gbwithparts", ".gbk"),
    MoleculeType.PROTEIN: ("protein", "fasta", ".fa"),
}

DEFAULT_MOLECULE_TYPE = MoleculeType.NUCLEOTIDE


@dataclass(frozen=True)
class MoleculeTypeResolution:
    """
    Outcome of reading a molecule type from untrusted input.

    `defaulted` is set when `original` was not a recognised variant and
    `variant` fell back to the default. Callers decide whether to log it.
    """
    variant: MoleculeType
    original: Any = None
    defaulted: bool = False


def resolve_molecule_type(value: Any) -> MoleculeTypeResolution:
    """
    Map an input value onto a MoleculeType without side effects.

    Strings and None always resolve; unknown strings and None fall back to
    nucleotide. Any other type raises ValueError.
    """
    if isinstance(value, MoleculeType):
        return MoleculeTypeResolution(variant=value, original=value.value)

    if value is None:
        return MoleculeTypeResolution(
            variant=DEFAULT_MOLECULE_TYPE, original=None, defaulted=True
        )

    if not isinstance(value, str):
        raise ValueError(f"molecule_type must be a string, got {type(value).__name__}")

    try:
        return MoleculeTypeResolution(variant=MoleculeType(value), original=value)
    except ValueError:
        return MoleculeTypeResolution(
            variant=DEFAULT_MOLECULE_TYPE, original=value, defaulted=True
        )
