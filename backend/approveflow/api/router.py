from fastapi import APIRouter
from approveflow.api.routers import projects, client, assist

api_router = APIRouter()
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(client.router, prefix="/client", tags=["client"])
api_router.include_router(assist.router, prefix="/assist", tags=["assist"])
