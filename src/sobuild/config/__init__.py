"""Configuration modules for sobuild."""

from .build_env import BuildEnvironment, split_flags

__all__ = [
    "BuildEnvironment",
    "split_flags",
]
