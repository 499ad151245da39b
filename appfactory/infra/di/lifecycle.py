"""Sharing policies for registered signatures."""

from enum import Enum


class Lifecycle(Enum):
    """How the builder treats instances produced by a signature."""

    SHARED = "shared"
    """One cached instance per container lifetime."""

    TRANSIENT = "transient"
    """New instance created on each request."""
