from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_catalog import __version__
from movie_catalog.actors.router import router as actors_router
from movie_catalog.auth.guards import authorize
from movie_catalog.auth.router import router as auth_router
from movie_catalog.auth.users import AuthService, UserRepository
from movie_catalog.base_service import BaseService
from movie_catalog.config import Settings
from movie_catalog.database import create_engine, create_session_factory, init_models
from movie_catalog.errors import register_error_handlers
from movie_catalog.movies.router import router as movies_router
from movie_catalog.ratings.router import router as ratings_router
from movie_catalog.seed import seed_catalog

base_service = BaseService("movie_catalog")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The lifespan owns the database engine and the user repository; both
    live on ``app.state`` until shutdown.
    """
    settings = settings or Settings.from_env()
    logging.getLogger().setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_service.log_event("service.startup", {"service": "main"})
        engine = create_engine(settings.database_url)
        await init_models(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

        repository = UserRepository(bcrypt_rounds=settings.bcrypt_rounds)
        auth_service = AuthService(
            repository,
            secret=settings.jwt_secret,
            token_ttl_seconds=settings.access_token_ttl_seconds,
        )
        auth_service.seed_demo_user()
        app.state.user_repository = repository
        app.state.auth_service = auth_service

        if settings.seed_on_startup:
            await seed_catalog(app.state.session_factory)
        try:
            yield
        finally:
            await engine.dispose()
            base_service.log_event("service.shutdown", {"service": "main"})

    app = FastAPI(
        title="Movie Catalog API",
        description="Movies, actors and ratings with token authentication",
        version=__version__,
        lifespan=lifespan,
        dependencies=[Depends(authorize)],
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(movies_router, prefix=settings.api_prefix)
    app.include_router(actors_router, prefix=settings.api_prefix)
    app.include_router(ratings_router, prefix=settings.api_prefix)

    @app.get("/health", name="health", tags=["health"])
    async def health_check():
        """Overall system health check."""
        return {"status": "ok", "version": __version__}

    return app


app = create_app()

# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("movie_catalog.main:app", host="0.0.0.0", port=3000, reload=True)
