from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from covercraft.api.v1.endpoints import cover_letters, custom_prompts, generate, me, resumes
from covercraft.core.config import settings
from covercraft.core.errors import CoverCraftError
from covercraft.db.seed import seed_default_prompt
from covercraft.db.session import SessionLocal, init_db
from contextlib import asynccontextmanager
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()
    try:
        seed_default_prompt(db)
    finally:
        db.close()
    yield

app = FastAPI(title="CoverCraft API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.include_router(cover_letters.router, prefix="/cover-letters", tags=["cover-letters"])
app.include_router(custom_prompts.router, prefix="/custom-prompts", tags=["custom-prompts"])
app.include_router(resumes.router, prefix="/resumes", tags=["resumes"])
app.include_router(generate.router, tags=["generation"])
app.include_router(me.router, tags=["auth"])


@app.exception_handler(CoverCraftError)
async def covercraft_error_handler(request: Request, exc: CoverCraftError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body for %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/health", tags=["health"])
async def health():
    """Health check endpoint returning service status."""
    return {"status": "ok"}
