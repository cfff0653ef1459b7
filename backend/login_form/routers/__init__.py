from fastapi import APIRouter

from . import auth, pages

api_router = APIRouter()
api_router.include_router(pages.router)
api_router.include_router(auth.router)
