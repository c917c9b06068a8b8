"""
Stateless HTTP adapter for otpcore using Flask.

Every request carries its own secret and parameters; nothing is stored.
"""

from .app import create_app

__all__ = ["create_app"]
