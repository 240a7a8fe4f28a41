from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
#Handles Cross-Origin Resource Sharing
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
#SQLAlchemy database engine and declarative base
from .database import engine, Base
from .config import settings
from .app_logger import get_logger
from .exceptions import ClinicError
from .middleware import SecurityMiddleware
#Models - imported for table creation
from . import models  # noqa: F401
#Routers - one group per clinic area
from .routers import (
    auth_router,
    students_router,
    medical_records_router,
    sick_leave_router,
    medicine_router,
    medicine_transactions_router,
    reports_router,
)

log = get_logger("api")

# Automatically create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Student Clinic API",
    description="Student health clinic: registrations, visits, sick leave, medicine stock and reports",
    version="1.0.0"
)

# Configure CORS(Cross-Origin Resource Sharing)
#allows the dashboard to access this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityMiddleware)


#Every failure leaves the API as {"error": message}
@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    else:
        log.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    #drop the "body" / "query" prefix pydantic adds
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = str(first.get("msg", "Invalid value")).replace("Value error, ", "")
    return f"{'.'.join(location)}: {message}" if location else message


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


#Anything that escaped the per-operation boundary, e.g. a fault inside a dependency
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.error("%s %s failed with an unhandled error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(auth_router)  #profile of the signed-in user
app.include_router(students_router)
app.include_router(medical_records_router)
app.include_router(sick_leave_router)
app.include_router(medicine_router)
app.include_router(medicine_transactions_router)
app.include_router(reports_router)

@app.get("/")
async def root():
    return {"message": "Student Clinic API is running"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
