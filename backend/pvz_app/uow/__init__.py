"""Unit of Work abstractions and concrete implementations.

This package re-exports the SQLAlchemy-backed unit of work used by the
services, alongside the abstract contracts they depend on.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyUnitOfWork, run_in_transaction

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "run_in_transaction",
]
