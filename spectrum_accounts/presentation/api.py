from fastapi import APIRouter

from spectrum_accounts.presentation.routers.users import router as users_router
from spectrum_accounts.presentation.routes.health import router as health_router

api = APIRouter()

routers = (health_router, users_router)
for router in routers:
    api.include_router(router)
