"""Product resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class ProductCreateSchema(Schema):
    """Payload for adding a product to the open reception of a pickup point.

    ``type`` is validated by the service so that an unknown value is reported
    as ``invalid_product_type``.
    """

    class Meta:
        unknown = EXCLUDE

    type = fields.String(required=True)
    pvz_id = fields.UUID(data_key="pvzId", required=True)


class ProductSchema(Schema):
    """Representation of the product entity."""

    id = fields.UUID(required=True)
    date_time = fields.DateTime(data_key="dateTime", required=True)
    type = fields.String(required=True)
    reception_id = fields.UUID(data_key="receptionId", required=True)
