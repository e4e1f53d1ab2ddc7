from fastapi import APIRouter
from clubdir.api.routes import admin, auth, clubs, portal

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(clubs.router, prefix="/clubs", tags=["clubs"])
router.include_router(portal.router, prefix="/portal", tags=["portal"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
