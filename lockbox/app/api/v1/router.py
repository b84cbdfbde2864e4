# lockbox/app/api/v1/router.py
from fastapi import APIRouter
from lockbox.app.api.v1.endpoints import generator, vault

api_router = APIRouter()
api_router.include_router(vault.router, tags=["vault"])
api_router.include_router(generator.router, tags=["generator"])
