# docusafe/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import init_db
from .api import documents, pages, workflow, settings as settings_api
from .config import settings
from .utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    api_logger.info(f"{settings.APP_NAME} API started", extra={
        "version": settings.APP_VERSION,
        "storage_path": str(settings.STORAGE_PATH)
    })
    yield


app = FastAPI(title=f"{settings.APP_NAME} API", version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(documents.router)
app.include_router(pages.router)
app.include_router(workflow.router)
app.include_router(settings_api.router)

@app.get("/")
async def root():
    return {"message": f"{settings.APP_NAME} API is running"}
