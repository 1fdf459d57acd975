import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from wair.core.config import settings
from wair.routers import chats, profile, tryon, wardrobe
from wair.services import llm as llm_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await llm_service.close_clients()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins if origins != ["*"] else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(wardrobe.router, prefix=prefix)
app.include_router(chats.router, prefix=prefix)
app.include_router(profile.router, prefix=prefix)
app.include_router(tryon.router, prefix=prefix)

logger = logging.getLogger("wair.requests")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}
