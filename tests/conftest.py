"""Test configuration and fixtures for the products microservice."""

from tests.fixtures import *  # noqa: F401,F403
