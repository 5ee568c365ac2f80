"""
pvz_app.services._shared.ports
==============================

Ports (hexagonal interfaces) the services depend on. Concrete adapters live
under ``pvz_app.infra``.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for issuing access tokens.
"""

from __future__ import annotations

from .token_provider import StubTokenProvider, TokenProvider

__all__ = ["StubTokenProvider", "TokenProvider"]
