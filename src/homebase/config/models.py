"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``homebase.toml`` only holds
overrides. The vault manifest (``config/settings.json`` inside the vault)
is modelled here too.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from homebase.domain.layout import VAULT_VERSION

# --- homebase.toml sections ---


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    dir_name: str = "Homebase"


class ProjectsConfig(BaseModel):
    """[projects] section."""

    model_config = {"frozen": True}

    default_status: str = "active"
    skip_malformed: bool = False


# --- Vault manifest (config/settings.json) ---


class VaultManifest(BaseModel):
    """Default settings written once when a vault is bootstrapped.

    Serialized with camelCase keys: ``{version, vaultPath, createdAt}``.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    version: int = VAULT_VERSION
    vault_path: str = Field(alias="vaultPath")
    created_at: str = Field(alias="createdAt")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
