"""Reception resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .product import ProductSchema


class ReceptionCreateSchema(Schema):
    """Payload for opening a reception at a pickup point."""

    class Meta:
        unknown = EXCLUDE

    pvz_id = fields.UUID(data_key="pvzId", required=True)


class ReceptionSchema(Schema):
    """Representation of the reception entity."""

    id = fields.UUID(required=True)
    date_time = fields.DateTime(data_key="dateTime", required=True)
    pvz_id = fields.UUID(data_key="pvzId", required=True)
    status = fields.String(required=True)


class ReceptionWithProductsSchema(Schema):
    """Reception with its products, oldest first."""

    reception = fields.Nested(ReceptionSchema, required=True)
    products = fields.List(fields.Nested(ProductSchema), required=True)
