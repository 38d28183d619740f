"""Pydantic schemas for API request/response models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator

from seqfetch.models import (
    DEFAULT_MOLECULE_TYPE,
    MoleculeType,
    MoleculeTypeResolution,
    resolve_molecule_type,
)


# ─────────────────────────────────────────────────────────────────────────────
# Download Job
# ─────────────────────────────────────────────────────────────────────────────

class DownloadJob(BaseModel):
    """
    A request to download one NCBI record.

    Every field is optional on input. `filename` is filled in by the
    executor once the output path is known and is sent back in the
    completion callback.
    """
    accession: str | None = None
    callback_id: str | None = None
    email: str | None = None
    filename: str | None = None
    molecule_type: MoleculeType = DEFAULT_MOLECULE_TYPE

    @field_validator("molecule_type", mode="before")
    @classmethod
    def coerce_molecule_type(cls, value: Any, info: ValidationInfo) -> MoleculeType:
        """Fall back to nucleotide for unknown values, recording what happened."""
        resolution = resolve_molecule_type(value)
        if isinstance(info.context, dict):
            info.context.setdefault("molecule_type", []).append(resolution)
        return resolution.variant

    def to_payload(self) -> dict[str, Any]:
        """JSON body for responses and callbacks; unset fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class ParsedDownloadJob:
    """A deserialized job plus how its molecule type was decided."""
    job: DownloadJob
    molecule_type: MoleculeTypeResolution


def parse_download_job(payload: bytes | str) -> ParsedDownloadJob:
    """
    Deserialize a request body into a DownloadJob.

    Raises:
        pydantic.ValidationError: body is not a JSON object matching the schema
    """
    context: dict[str, list[MoleculeTypeResolution]] = {}
    job = DownloadJob.model_validate_json(payload, context=context)

    resolutions = context.get("molecule_type")
    if resolutions:
        resolution = resolutions[-1]
    else:
        # Field absent: the model default applies and nothing was coerced
        resolution = MoleculeTypeResolution(variant=job.molecule_type)

    return ParsedDownloadJob(job=job, molecule_type=resolution)


__all__ = [
    "DownloadJob",
    "ParsedDownloadJob",
    "parse_download_job",
]
