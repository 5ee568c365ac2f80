"""Pickup point endpoints, including the reception/product shortcuts keyed by pickup point."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from pvz_app.api.deps import (
    current_context,
    json_body,
    json_response,
    parse_uuid,
    require_role,
    timing,
)
from pvz_app.models.user import Role
from pvz_app.schemas import (
    MetaSchema,
    ProductSchema,
    PVZCreateSchema,
    PVZFilterSchema,
    PVZSchema,
    PVZWithReceptionsSchema,
    ReceptionWithProductsSchema,
)
from pvz_app.services._shared.dto import PaginationIn
from pvz_app.services.products.service import ProductService
from pvz_app.services.pvz.dto import PVZCreateIn, PVZListIn
from pvz_app.services.pvz.service import PVZService
from pvz_app.services.receptions.service import ReceptionService

bp = Blueprint("pvz", __name__)

pvz_schema = PVZSchema()
pvz_create_schema = PVZCreateSchema()
pvz_list_schema = PVZWithReceptionsSchema(many=True)
reception_schema = ReceptionWithProductsSchema()
product_schema = ProductSchema()
meta_schema = MetaSchema()


def _filter_schema() -> PVZFilterSchema:
    return PVZFilterSchema(
        default_limit=int(current_app.config.get("PVZ_PAGE_DEFAULT_LIMIT", 10)),
        max_limit=int(current_app.config.get("PVZ_PAGE_MAX_LIMIT", 30)),
    )


@bp.post("")
@require_role(Role.MODERATOR.value)
@timing
def create_pvz():
    """Register a pickup point."""

    data = pvz_create_schema.load(json_body())
    pvz = PVZService(ctx=current_context()).create_pvz(PVZCreateIn(city=data["city"]))
    return json_response({"data": pvz_schema.dump(pvz)}, status=201)


@bp.get("")
@require_role(Role.EMPLOYEE.value, Role.MODERATOR.value)
@timing
def list_pvz():
    """Return paginated pickup points with their receptions and products."""

    filters = _filter_schema().load(request.args)
    dto = PVZListIn(
        pagination=PaginationIn(page=filters["page"], limit=filters["limit"], sort=filters["sort"]),
        date_from=filters.get("start_date"),
        date_to=filters.get("end_date"),
    )
    page = PVZService(ctx=current_context()).list_pvz_with_receptions(dto)
    data = pvz_list_schema.dump(page.items)
    return json_response({"data": data, "meta": meta_schema.dump(page.meta)})


@bp.get("/<pvz_id>")
@require_role(Role.EMPLOYEE.value, Role.MODERATOR.value)
@timing
def get_pvz(pvz_id: str):
    """Return a single pickup point."""

    pvz = PVZService(ctx=current_context()).get_pvz(parse_uuid(pvz_id, field="pvzId"))
    return json_response({"data": pvz_schema.dump(pvz)})


@bp.post("/<pvz_id>/close_last_reception")
@require_role(Role.EMPLOYEE.value)
@timing
def close_last_reception(pvz_id: str):
    """Close the open reception of a pickup point."""

    service = ReceptionService(ctx=current_context())
    closed = service.close_last_reception(parse_uuid(pvz_id, field="pvzId"))
    return json_response({"data": reception_schema.dump(closed)})


@bp.post("/<pvz_id>/delete_last_product")
@require_role(Role.EMPLOYEE.value)
@timing
def delete_last_product(pvz_id: str):
    """Remove the most recently added product of the open reception."""

    service = ProductService(ctx=current_context())
    removed = service.delete_last_product(parse_uuid(pvz_id, field="pvzId"))
    return json_response({"data": product_schema.dump(removed)})
