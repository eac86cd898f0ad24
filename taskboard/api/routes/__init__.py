"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from taskboard.api.routes import auth, health, tasks, users

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, tags=["users"])
router.include_router(tasks.router, tags=["tasks"])
