"""Shared pytest fixtures and helpers."""

from .core import *  # noqa: F401,F403
from .redis import *  # noqa: F401,F403
