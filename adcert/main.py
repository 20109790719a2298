"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from adcert.api import auth, submissions, certificates, audit_logs
from adcert.core.config import settings
from adcert.core.exceptions import WorkflowError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ARCON Advert Certification", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Routes
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(submissions.router, prefix="/submissions",
                   tags=["submissions"])
# Public verification lives here too
app.include_router(certificates.router, prefix="/certificates",
                   tags=["certificates"])
app.include_router(audit_logs.router, prefix="/audit-logs",
                   tags=["audit-logs"])


@app.get("/")
def read_root():
    return {"message": "ARCON Advert Certification API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
