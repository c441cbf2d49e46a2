# account_server/main.py

import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from account_server import __version__
from account_server.api import auth, routes
from account_server.config import Settings, load_settings
from account_server.core.errors import AccountError, InvalidInput
from account_server.core.security import TokenService
from account_server.database import build_engine, build_session_factory, init_db, safe_url


logger = logging.getLogger(__name__)


# -------------------------------
# Error Handlers
# -------------------------------

async def handle_account_error(request: Request, exc: AccountError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = [(e["loc"], e["msg"]) for e in exc.errors()]
    logger.warning("Rejected request body on %s: %s", request.url.path, fields)
    err = InvalidInput()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("Store failure on %s: %s", request.url.path, type(exc).__name__)
    return JSONResponse(status_code=500, content={"message": "Server error"})


# -------------------------------
# Application Factory
# -------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    engine = build_engine(settings.database_url)
    init_db(engine)
    logger.info("Database ready at %s", safe_url(settings.database_url))

    app = FastAPI(title="Account Server", version=__version__)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.token_expire_minutes,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.add_exception_handler(AccountError, handle_account_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    app.include_router(routes.health_router)

    logger.info("User routes mounted at %s", settings.api_prefix or "/")
    return app


def run():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
