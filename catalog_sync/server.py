import logging

from fastapi import FastAPI
import uvicorn

from catalog_sync.api.routers import webhook_router
from catalog_sync.api.graphql.router import graphql_router
from catalog_sync.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)

# Include routers
app.include_router(webhook_router.router, tags=["webhooks"])
app.include_router(graphql_router, prefix="/graphql", tags=["graphql"])


@app.get("/", tags=["Root"])
async def read_root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME}"}


if __name__ == "__main__":
    uvicorn.run("catalog_sync.server:app", host="0.0.0.0", port=8000, reload=True)
