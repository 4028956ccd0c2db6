import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import sentry_sdk

from catresume.api.v1.health import router as health_router
from catresume.api.v1.resume import router as resume_router
from catresume.core.rate_limit import limiter, rate_limit_exceeded_handler
from catresume.core.config import settings
from dotenv import load_dotenv
from catresume.core.lifespan import lifespan
from catresume.services.audio import AUDIO_ROUTE

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Cat Resume Reviewer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.mount(AUDIO_ROUTE, StaticFiles(directory=settings.audio_dir, check_dir=False), name="audio")

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(resume_router, prefix="/v1", tags=["Resume"])


@app.get("/", include_in_schema=False)
async def root():
    return {"status": "ok", "message": "Resume analysis service is running"}
