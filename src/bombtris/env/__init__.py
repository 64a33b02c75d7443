"""Gymnasium environments for Bombtris."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Bombtris-10x20-v0",
    entry_point="bombtris.env.bombtris_env:BombtrisEnv",
)

__all__ = ["Bombtris-10x20-v0"]
