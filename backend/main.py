import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.core import config
from backend.core.errors import ServiceError
from backend.database import Database
from backend.routes import booking_routes, flight_routes, user_routes

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config.validate_runtime_config()
        app.state.database.create_schema()
        try:
            yield
        finally:
            app.state.database.dispose()

    app = FastAPI(title='Air Ticket Booking API', lifespan=lifespan)
    app.state.database = database or Database(config.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.middleware('http')
    async def enforce_request_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=config.REQUEST_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.warning('Request timed out: %s %s', request.method, request.url.path)
            return JSONResponse(status_code=504, content={'message': 'Request timed out'})

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={'message': exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        # The offending input is left out: it may be a non-finite float that JSON cannot carry.
        errors = [
            {'type': error['type'], 'loc': error['loc'], 'msg': error['msg']}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={'message': 'Invalid request body', 'errors': jsonable_encoder(errors)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={'message': 'Internal server error'})

    @app.get('/')
    def root():
        return {'message': 'Welcome to Air Ticket Booking'}

    app.include_router(user_routes.router, prefix='/api/user')
    app.include_router(flight_routes.router, prefix='/api/flight')
    app.include_router(booking_routes.router, prefix='/api/booking')

    return app


config.setup_logging()

app = create_app()
