from pvz_app.models.pickup_point import City, PickupPoint
from pvz_app.models.product import Product, ProductType
from pvz_app.models.reception import Reception, ReceptionStatus
from pvz_app.models.user import Role, User

__all__ = [
    "City",
    "PickupPoint",
    "Product",
    "ProductType",
    "Reception",
    "ReceptionStatus",
    "Role",
    "User",
]
