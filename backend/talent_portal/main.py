"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from talent_portal.config import settings
from talent_portal.database import Base, engine
from talent_portal.errors import PortalError

# Import routers
from talent_portal.routers import (
    auth, users, requests, cohorts, announcements, scorecards,
    certificates, feedback, analytics, dashboard, agent,
)

# Import all models so Base.metadata knows about them
from talent_portal.models.user import User                        # noqa: F401
from talent_portal.models.cohort import Cohort                    # noqa: F401
from talent_portal.models.leave_request import LeaveRequest       # noqa: F401
from talent_portal.models.it_ticket import ITSupportTicket        # noqa: F401
from talent_portal.models.profile_update import ProfileUpdateRequest  # noqa: F401
from talent_portal.models.announcement import Announcement        # noqa: F401
from talent_portal.models.scorecard import ScoreCard              # noqa: F401
from talent_portal.models.certificate import VerifiedCertificate  # noqa: F401
from talent_portal.models.feedback import FeedbackEntry           # noqa: F401
from talent_portal.models.candidate_metric import CandidateMetric  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Talent Portal",
    description="Candidate and staff portal — leave, IT support and profile-update approvals with AI assistants",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(requests.router, prefix="/api/requests", tags=["Requests"])
app.include_router(cohorts.router, prefix="/api/cohorts", tags=["Cohorts"])
app.include_router(announcements.router, prefix="/api/announcements", tags=["Announcements"])
app.include_router(scorecards.router, prefix="/api/scorecards", tags=["ScoreCards"])
app.include_router(certificates.router, prefix="/api/certificates", tags=["Certificates"])
app.include_router(feedback.router, prefix="/api/feedback", tags=["Feedback"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(agent.router, prefix="/api/agent", tags=["Agent"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
