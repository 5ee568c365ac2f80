"""Reception state rules shared by the lifecycle and product services."""

from __future__ import annotations

from uuid import UUID

from pvz_app.models.reception import Reception
from pvz_app.services._shared.errors import (
    NoActiveReceptionError,
    ReceptionCannotBeModifiedError,
)
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


def require_modifiable_reception(uow: SQLAlchemyUnitOfWork, pvz_id: UUID) -> Reception:
    """
    Return the reception whose products may change, locked for the unit of work.

    :param uow: Active unit of work.
    :param pvz_id: Pickup point id.
    :returns: The OPEN reception of the pickup point.
    :raises NoActiveReceptionError: If the pickup point never had a reception.
    :raises ReceptionCannotBeModifiedError: If its latest reception is closed.
    """
    reception = uow.receptions.get_open_for_pvz(pvz_id, for_update=True)
    if reception is None:
        reception = uow.receptions.get_latest_for_pvz(pvz_id)
        if reception is None:
            raise NoActiveReceptionError(pvz_id)
    # Re-checked here because the lookup above may fall back to a closed one
    if not reception.is_open:
        raise ReceptionCannotBeModifiedError(reception.id)
    return reception
