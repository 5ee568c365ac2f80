"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class SortQuerySchema(Schema):
    """Parse comma-separated ``sort`` query parameters into a list."""

    class Meta:
        unknown = EXCLUDE

    sort = fields.String(load_default="")

    @post_load
    def split_sort(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("sort") or ""
        data["sort"] = [segment.strip() for segment in raw.split(",") if segment.strip()]
        return data


class PaginationQuerySchema(SortQuerySchema):
    """Validate pagination parameters; out-of-range limits are rejected."""

    def __init__(self, *, default_limit: int = 10, max_limit: int = 30, **kwargs: Any) -> None:
        self._default_limit = default_limit
        super().__init__(**kwargs)
        self.fields["limit"].validators = [validate.Range(min=1, max=max_limit)]

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer()

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data.setdefault("limit", self._default_limit)
        data.setdefault("page", 1)
        return data


class MetaSchema(Schema):
    """Metadata block for paginated responses."""

    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    has_prev = fields.Boolean(data_key="hasPrev")
    has_next = fields.Boolean(data_key="hasNext")


def build_meta(*, total: int, page: int, limit: int, **extra: Any) -> dict[str, Any]:
    """Return a ``meta`` mapping for paginated responses."""

    meta: dict[str, Any] = {"total": int(total), "page": int(page), "limit": int(limit)}
    meta.update(extra)
    return meta
