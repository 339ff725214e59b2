from fastapi import APIRouter

from app.api import api_user, api_auth, api_healthcheck, api_session, api_progress, api_relay

router = APIRouter()

router.include_router(api_healthcheck.router, tags=["health-check"], prefix="/healthcheck")
router.include_router(api_auth.router, tags=["authentication"], prefix="/auth")
router.include_router(api_user.router, tags=["user"], prefix="/users")
router.include_router(api_session.router, tags=["session"], prefix="/sessions")
router.include_router(api_progress.router, tags=["progress"])
router.include_router(api_relay.router, tags=["relay"], prefix="/relay")
