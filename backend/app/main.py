from collections import defaultdict, deque
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services.seed import seed_demo_data


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

settings = get_settings()
logger = logging.getLogger("twealth.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
    if settings.seed_demo_data:
        with SessionLocal() as db:
            try:
                seed_demo_data(db)
            except Exception:
                db.rollback()
                logger.exception("Skipping demo seed due to startup error.")
    logger.info("Twealth Score API ready.")
    yield
    engine.dispose()
    logger.info("Twealth Score API shutdown complete.")


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_request_buckets: dict[str, deque[float]] = defaultdict(deque)
_last_sweep = 0.0


def _sweep_idle_buckets(now: float) -> None:
    global _last_sweep
    window = settings.rate_limit_window_seconds
    if now - _last_sweep < window:
        return
    _last_sweep = now
    idle = [key for key, bucket in _request_buckets.items() if not bucket or now - bucket[-1] > window]
    for key in idle:
        del _request_buckets[key]


def _rate_limited(request: Request) -> bool:
    host = request.client.host if request.client else "unknown"
    now = time.time()
    _sweep_idle_buckets(now)
    bucket = _request_buckets[f"{host}:{request.url.path}"]
    while bucket and now - bucket[0] > settings.rate_limit_window_seconds:
        bucket.popleft()
    if len(bucket) >= settings.rate_limit_requests:
        return True
    bucket.append(now)
    return False


@app.middleware("http")
async def request_log_and_rate_limit(request: Request, call_next):
    if _rate_limited(request):
        return JSONResponse(
            status_code=429,
            content={"detail": "Rate limit exceeded. Please retry later."},
        )

    started = time.monotonic()
    try:
        response = await call_next(request)
    except Exception as exc:  # pragma: no cover
        logger.exception("Unhandled error for %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    logger.info(
        "%s %s -> %s %.2fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.monotonic() - started) * 1000,
    )
    return response


app.include_router(api_router, prefix=settings.api_prefix)
