import logging

from fastapi import Depends, FastAPI

from postmatter.routers import posts
from postmatter.security import get_api_key
from postmatter.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="postmatter API",
    description="Parsed front matter and bodies of markdown posts",
)

app.include_router(posts.router, dependencies=[Depends(get_api_key)])

logger.info(f"Serving posts from {settings.CONTENT_DIR}")


@app.get("/")
async def root():
    return {"message": "postmatter API is running"}
