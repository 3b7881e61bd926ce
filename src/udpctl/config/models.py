"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, udpctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- udpctl.toml sections ---


class SocketConfig(BaseModel):
    """[socket] section."""

    model_config = {"frozen": True}

    link_security: bool = True
    message_pool_size: int = Field(default=16, ge=1)
    max_message_length: int = Field(default=1280, ge=1, le=65527)


class PayloadConfig(BaseModel):
    """[payload] section."""

    model_config = {"frozen": True}

    hex_chunk_size: int = Field(default=50, ge=1)


class ReceiveConfig(BaseModel):
    """[receive] section."""

    model_config = {"frozen": True}

    max_length: int = Field(default=1500, ge=2)


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    prompt: str = "> "
