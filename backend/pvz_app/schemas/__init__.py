"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import DummyLoginSchema, LoginSchema, RegisterSchema, TokenResponseSchema, UserSchema
from .common import MetaSchema, PaginationQuerySchema, SortQuerySchema, build_meta
from .product import ProductCreateSchema, ProductSchema
from .pvz import PVZCreateSchema, PVZFilterSchema, PVZSchema, PVZWithReceptionsSchema
from .reception import ReceptionCreateSchema, ReceptionSchema, ReceptionWithProductsSchema

__all__ = [
    "DummyLoginSchema",
    "LoginSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "UserSchema",
    "PaginationQuerySchema",
    "SortQuerySchema",
    "MetaSchema",
    "build_meta",
    "ProductSchema",
    "ProductCreateSchema",
    "PVZSchema",
    "PVZCreateSchema",
    "PVZFilterSchema",
    "PVZWithReceptionsSchema",
    "ReceptionSchema",
    "ReceptionCreateSchema",
    "ReceptionWithProductsSchema",
]
