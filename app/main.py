# /app/main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# --- Core / DB ---
from app.db.session import init_db

# --- API Routers ---
from app.api.routes import instructor_auth as instructor_auth_router
from app.api.routes import instructor as instructor_router
from app.api.routes import admin as admin_router


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    force=True
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Instructor Directory API",
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    logging.info(
        f"Request processed: {request.method} {request.url.path} - Completed in {process_time:.4f} secs"
    )

    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    instructor_auth_router.router,
    prefix="/api/v1/instructors-auth",
    tags=["Authentication"]
)

app.include_router(
    instructor_router.router,
    prefix="/api/v1/instructors",
    tags=["instructors"]
)

app.include_router(
    admin_router.router,
    prefix="/api/v1/admin",
    tags=["admin"]
)
