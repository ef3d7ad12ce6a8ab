"""FastAPI application serving the demo user catalogue for selectors."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from server.core.UserCatalogService import UserCatalogService
from server.routers.UsersRouter import router as users_router

app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    logging = setup_logging()
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)
    app.state.user_catalog = UserCatalogService(helper_config=app.state.helper_config)
    logging.info("Demo user API ready.")

    # while the app is running...
    yield

    logging.info("Demo user API shut down.")


app = FastAPI(
    title="autocomplete_bridge demo backend",
    description=(
        "Searchable user listing for exercising async selectors. "
        "GET /users returns a plain array, GET /users/paged returns "
        "{results, next, count} pages."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("APP_PORT", "8000"))
    setup_logging().info("Starting demo user API v%s on port %d...", app_version, port)
    uvicorn.run(app, host="0.0.0.0", port=port)
