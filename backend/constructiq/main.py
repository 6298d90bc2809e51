# backend/constructiq/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import activity, directory, documents, projects, rfis, specifications, submittals, tasks
from .dependencies import create_workspace, get_workspace, set_workspace
from .errors import InvalidOperation, PersistenceFailure, ValidationFailure
from .utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    workspace = await create_workspace()
    set_workspace(workspace)
    api_logger.info("Workspace ready", extra={"backend": type(workspace.store.adapter).__name__})
    yield
    await get_workspace().store.adapter.close()
    set_workspace(None)


app = FastAPI(title="ConstructIQ API", lifespan=lifespan)

# Configure CORS with explicit headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your actual frontend URL
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projects.router)
app.include_router(directory.router)
app.include_router(documents.router)
app.include_router(tasks.router)
app.include_router(rfis.router)
app.include_router(submittals.router)
app.include_router(specifications.router)
app.include_router(activity.router)


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    api_logger.warning(exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=422, content={"detail": exc.message, "errors": exc.errors})


@app.exception_handler(InvalidOperation)
async def invalid_operation_handler(request: Request, exc: InvalidOperation):
    api_logger.warning(exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(PersistenceFailure)
async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
    api_logger.error(exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.get("/")
async def root():
    return {"message": "ConstructIQ API is running"}
