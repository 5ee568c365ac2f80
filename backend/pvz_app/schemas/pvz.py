"""Pickup point resource schemas."""

from __future__ import annotations

from datetime import UTC
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validates_schema

from .common import PaginationQuerySchema
from .reception import ReceptionWithProductsSchema


class PVZCreateSchema(Schema):
    """Payload for registering a pickup point.

    The city is checked against the supported set by the service, so an
    unknown city surfaces as ``invalid_city`` rather than a schema error.
    """

    class Meta:
        unknown = EXCLUDE

    city = fields.String(required=True)


class PVZFilterSchema(PaginationQuerySchema):
    """Query parameters accepted by the pickup point listing."""

    start_date = fields.AwareDateTime(
        data_key="startDate", load_default=None, default_timezone=UTC
    )
    end_date = fields.AwareDateTime(data_key="endDate", load_default=None, default_timezone=UTC)

    @validates_schema
    def check_window(self, data: dict[str, Any], **_: Any) -> None:
        start, end = data.get("start_date"), data.get("end_date")
        if start is not None and end is not None and end < start:
            raise ValidationError("endDate must not precede startDate", field_name="endDate")


class PVZSchema(Schema):
    """Representation of the pickup point entity."""

    id = fields.UUID(required=True)
    registration_date = fields.DateTime(data_key="registrationDate", required=True)
    city = fields.String(required=True)


class PVZWithReceptionsSchema(Schema):
    """Pickup point with its receptions and their products."""

    pvz = fields.Nested(PVZSchema, required=True)
    receptions = fields.List(fields.Nested(ReceptionWithProductsSchema), required=True)
