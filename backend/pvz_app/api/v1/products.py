"""Product endpoints."""

from __future__ import annotations

from flask import Blueprint

from pvz_app.api.deps import current_context, json_body, json_response, require_role, timing
from pvz_app.models.user import Role
from pvz_app.schemas import ProductCreateSchema, ProductSchema
from pvz_app.services.products.dto import ProductAddIn
from pvz_app.services.products.service import ProductService

bp = Blueprint("products", __name__)

product_schema = ProductSchema()
product_create_schema = ProductCreateSchema()


@bp.post("")
@require_role(Role.EMPLOYEE.value)
@timing
def add_product():
    """Add a product to the open reception of a pickup point."""

    data = product_create_schema.load(json_body())
    product = ProductService(ctx=current_context()).add_product(
        ProductAddIn(product_type=data["type"], pvz_id=data["pvz_id"])
    )
    return json_response({"data": product_schema.dump(product)}, status=201)
