"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .products import bp as products_bp  # noqa: E402
from .pvz import bp as pvz_bp  # noqa: E402
from .receptions import bp as receptions_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (auth_bp, ""),  # -> /api/v1/dummyLogin, /register, /login
    (pvz_bp, "/pvz"),
    (receptions_bp, "/receptions"),
    (products_bp, "/products"),
]
