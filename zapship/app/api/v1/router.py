"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from zapship.app.api.v1.endpoints import audit, auth, users, parcels, riders, payments

router = APIRouter()

# Identity inspection / logout
router.include_router(auth.router)

# Marketplace resources
router.include_router(users.router)
router.include_router(parcels.router)
router.include_router(riders.router)

# Checkout, payment finalization and ledger
router.include_router(payments.router)

# Operator views
router.include_router(audit.router)
