"""HTTP front end: ``uvicorn md2latex.main:app``."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from md2latex import __version__
from md2latex.api.router import api_router
from md2latex.config import settings
from md2latex.log_config import setup_logging

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="md2latex API",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
