import asyncio

from typing import Callable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager, suppress

import uvicorn

from coffee_server.config import app_config
from coffee_server.routers import coffee, root, users
from coffee_server.database.base_repo import BaseRepository
from coffee_server.database.mongo_repo import MongoRepository
from coffee_server.handlers.error_handlers import register_error_handlers
from coffee_server.common.log import log_app_startup, log_app_shutdown, log_server_listening


def create_app(repo_factory: Callable[[], BaseRepository] = MongoRepository) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_app_startup()

        # a bad URI or driver setup error is fatal, an unreachable server is not
        repo = repo_factory()
        await repo.connect(app_config.DATABASE_URL)
        app.state.repo = repo
        # the listener must not wait for server selection to time out
        app.state.ping_task = asyncio.create_task(repo.ping())

        yield

        ping_task = app.state.ping_task
        if not ping_task.done():
            ping_task.cancel()
        with suppress(asyncio.CancelledError):
            await ping_task

        await repo.close()
        app.state.repo = None
        log_app_shutdown()

    app = FastAPI(title = "coffee-server", lifespan = lifespan)
    app.state.repo = None
    app.state.ping_task = None

    # registered first so CORS stays the outermost layer
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins = ["*"],
        allow_methods = ["*"],
        allow_headers = ["*"],
    )

    app.include_router(root.router)
    app.include_router(coffee.router)
    app.include_router(users.router)

    return app


app = create_app()


async def run_fastapi():
    uvicorn_server = uvicorn.Server(uvicorn.Config(app, host = app_config.HOST, port = app_config.PORT))
    log_server_listening(app_config.HOST, app_config.PORT)
    await uvicorn_server.serve()

def run():
    asyncio.run(run_fastapi())

if __name__ == "__main__":
    run()
