from fastapi import APIRouter

from fittrack.core.auth import fastapi_users, auth_backend, UserRead, UserCreate
from fittrack.api.v1.routes import auth, dashboard, feed, goals, notification, progress, users

api_router = APIRouter()

# Custom logout must be registered before the fastapi-users auth router
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["Authentication"],
)
api_router.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["Authentication"],
)
api_router.include_router(
    fastapi_users.get_verify_router(UserRead),
    prefix="/auth",
    tags=["Email Verification"],
)
api_router.include_router(
    fastapi_users.get_reset_password_router(),
    prefix="/auth",
    tags=["Password Reset"],
)

api_router.include_router(users.router, prefix="/users", tags=["User Management"])
api_router.include_router(goals.router)
api_router.include_router(progress.router)
api_router.include_router(dashboard.router)
api_router.include_router(feed.router)
api_router.include_router(notification.router, prefix="/notification", tags=["Notifications"])
