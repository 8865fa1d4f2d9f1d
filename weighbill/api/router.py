# weighbill/api/router.py
from fastapi import APIRouter

from weighbill.api import (
    routes_attendance,
    routes_billing,
    routes_billing_payments,
    routes_dashboard,
    routes_inventory,
)

api_router = APIRouter()

# Billing
api_router.include_router(routes_billing.router)
api_router.include_router(routes_billing_payments.router)

# Inventory / dashboard
api_router.include_router(routes_inventory.router)
api_router.include_router(routes_dashboard.router)

# Staff
api_router.include_router(routes_attendance.router)
