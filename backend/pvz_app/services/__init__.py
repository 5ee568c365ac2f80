"""Service layer.

Subpackages
-----------
- ``_shared``: error taxonomy (:mod:`~pvz_app.services._shared.errors`),
  :class:`~pvz_app.services._shared.base.BaseService`, shared DTOs, policies
  and ports.
- ``pvz``: :class:`~pvz_app.services.pvz.service.PVZService` (catalog).
- ``receptions``: :class:`~pvz_app.services.receptions.service.ReceptionService`
  (lifecycle).
- ``products``: :class:`~pvz_app.services.products.service.ProductService`.
- ``identity``: :class:`~pvz_app.services.identity.service.IdentityService`.

Nothing is re-exported here: repositories import the error taxonomy from this
package, so importing the services eagerly would create an import cycle.
"""
