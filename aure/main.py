import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from aure.core.config import settings
from aure.routers import collection, fragrances, outfit, perfumes, preferences, sessions, vibes, wear, weather
from aure.routers import taxonomy as taxonomy_router

app = FastAPI(title=settings.APP_NAME)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(taxonomy_router.router, prefix=prefix)
app.include_router(perfumes.router, prefix=prefix)
app.include_router(fragrances.router, prefix=prefix)
app.include_router(collection.router, prefix=prefix)
app.include_router(sessions.router, prefix=prefix)
app.include_router(wear.router, prefix=prefix)
app.include_router(vibes.router, prefix=prefix)
app.include_router(vibes.uploads_router, prefix=prefix)
app.include_router(preferences.router, prefix=prefix)
app.include_router(weather.router, prefix=prefix)
app.include_router(outfit.router, prefix=prefix)

logger = logging.getLogger("app.requests")

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

@app.get("/health")
async def health():
    return {"ok": True}
