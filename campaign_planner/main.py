import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from campaign_planner.api import router
from campaign_planner.db import init_db
from campaign_planner.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Campaign Planner", version="0.1.0", lifespan=lifespan)
app.include_router(router)
