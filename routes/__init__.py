# routes/__init__.py
from __future__ import annotations
from fastapi import APIRouter

from . import departamento_router, funcionario_router

api_router = APIRouter()
api_router.include_router(departamento_router.router_v1)
api_router.include_router(funcionario_router.router_v1)
api_router.include_router(departamento_router.router_v2)
api_router.include_router(funcionario_router.router_v2)
