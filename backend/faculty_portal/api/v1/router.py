from fastapi import APIRouter
from faculty_portal.api.v1.endpoints import (
    auth,
    reports,
    complaints,
    classes,
    assignments,
    ratings,
    monitoring,
    export,
    system,
    public,
    upload,
    users,
    health,
)

api_router = APIRouter()

api_router.include_router(health.router)

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
api_router.include_router(complaints.router, prefix="/complaints", tags=["Complaints"])
api_router.include_router(classes.router, prefix="/classes", tags=["Classes"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["Ratings"])
api_router.include_router(monitoring.router, prefix="/monitoring", tags=["Monitoring"])
api_router.include_router(export.router, prefix="/export", tags=["Export"])
api_router.include_router(system.router, prefix="/system", tags=["System"])
api_router.include_router(public.router, prefix="/public", tags=["Public"])
api_router.include_router(upload.router, prefix="/upload", tags=["Upload"])
