# weighbill/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weighbill.api.exception_handlers import register_exception_handlers
from weighbill.api.router import api_router
from weighbill.core.config import settings
from weighbill.core.logging import setup_logging
from weighbill.db.session import init_db

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # local ledger / attendance tables
    init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)


# Health
@app.get("/")
def root():
    return {"message": "Weighbill API running", "version": "v1"}
