"""Reception endpoints."""

from __future__ import annotations

from flask import Blueprint

from pvz_app.api.deps import current_context, json_body, json_response, require_role, timing
from pvz_app.models.user import Role
from pvz_app.schemas import ReceptionCreateSchema, ReceptionSchema
from pvz_app.services.receptions.service import ReceptionService

bp = Blueprint("receptions", __name__)

reception_schema = ReceptionSchema()
reception_create_schema = ReceptionCreateSchema()


@bp.post("")
@require_role(Role.EMPLOYEE.value)
@timing
def create_reception():
    """Open a reception at a pickup point."""

    data = reception_create_schema.load(json_body())
    reception = ReceptionService(ctx=current_context()).create_reception(data["pvz_id"])
    return json_response({"data": reception_schema.dump(reception)}, status=201)
