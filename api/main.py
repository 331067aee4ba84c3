import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core import config, db
from movies import repository as movie_repository
from movies import router as movies_router

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process; a failure here is fatal.
    await db.init_pool()
    try:
        await movie_repository.ensure_schema(db.get_database())
        logger.info("schema_ready table=movies")
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="movies-api", lifespan=lifespan)

app.include_router(movies_router.router, tags=["movies"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host=config.api_host(), port=config.api_port())
