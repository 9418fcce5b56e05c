from fastapi import APIRouter
from app.api.routers import auth, projects, production, inspections, refusals, forecast, reports, admin

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(production.router, prefix="/production", tags=["production"])
api_router.include_router(inspections.router, prefix="/inspections", tags=["qc"])
api_router.include_router(refusals.router, prefix="/refusals", tags=["refusals"])
api_router.include_router(forecast.router, prefix="/forecast", tags=["forecast"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
