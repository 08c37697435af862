from fastapi import APIRouter

from ewm.api.routes.admin_categories import router as admin_categories_router
from ewm.api.routes.admin_comments import router as admin_comments_router
from ewm.api.routes.admin_compilations import router as admin_compilations_router
from ewm.api.routes.admin_events import router as admin_events_router
from ewm.api.routes.admin_users import router as admin_users_router
from ewm.api.routes.private_comments import router as private_comments_router
from ewm.api.routes.private_events import router as private_events_router
from ewm.api.routes.private_requests import router as private_requests_router
from ewm.api.routes.public_categories import router as public_categories_router
from ewm.api.routes.public_comments import router as public_comments_router
from ewm.api.routes.public_compilations import router as public_compilations_router
from ewm.api.routes.public_events import router as public_events_router

router = APIRouter()

# admin
router.include_router(admin_users_router)
router.include_router(admin_categories_router)
router.include_router(admin_events_router)
router.include_router(admin_compilations_router)
router.include_router(admin_comments_router)

# private (per user)
router.include_router(private_events_router)
router.include_router(private_requests_router)
router.include_router(private_comments_router)

# public
router.include_router(public_categories_router)
router.include_router(public_events_router)
router.include_router(public_compilations_router)
router.include_router(public_comments_router)
