"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, adledger.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    directory: str = ".adledger"
    filename: str = "adledger.db"


class ListingConfig(BaseModel):
    """[listing] section."""

    model_config = {"frozen": True}

    # Max rows rendered by ``adledger list`` in human mode (0 = unlimited).
    list_limit: int = Field(default=0, ge=0)

