"""Pydantic models describing the ethscriptions indexer payloads."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


class IndexerBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EthscriptionPayload(IndexerBaseModel):
    current_owner: str

    @field_validator("current_owner", mode="before")
    @classmethod
    def _validate_address(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            if not _ADDRESS_PATTERN.match(stripped):
                raise ValueError(f"Not an address: {value!r}")
            return stripped.lower()
        return value


class ExistsResult(IndexerBaseModel):
    exists: bool
    ethscription: EthscriptionPayload | None = None


class ExistsResponse(IndexerBaseModel):
    result: ExistsResult
