"""API route modules."""

from catering.api.routes.businesses import router as businesses_router
from catering.api.routes.health import router as health_router
from catering.api.routes.inventory import router as inventory_router
from catering.api.routes.menu import router as menu_router
from catering.api.routes.orders import router as orders_router
from catering.api.routes.payments import router as payments_router
from catering.api.routes.purchases import router as purchases_router
from catering.api.routes.reports import router as reports_router
from catering.api.routes.roles import router as roles_router
from catering.api.routes.staff import router as staff_router

__all__ = [
    "health_router",
    "businesses_router",
    "inventory_router",
    "purchases_router",
    "orders_router",
    "payments_router",
    "menu_router",
    "reports_router",
    "roles_router",
    "staff_router",
]
