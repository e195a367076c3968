"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, posctl.toml only contains overrides.
A fresh install needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel

# --- posctl.toml sections ---


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    filename: str = "posctl.db"
    echo: bool = False


class OrdersConfig(BaseModel):
    """[orders] section.

    ``strict_transitions`` additionally forbids backward and self status
    transitions. COMPLETION is terminal either way.
    """

    model_config = {"frozen": True}

    strict_transitions: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True

