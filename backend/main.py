import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.core.errors import Internal, PortalError, ValidationFailed, describe_validation_errors
from backend.database import init_db
from backend.models import event, event_participant, post, team, user  # noqa: F401
from backend.routes import (
    announcement_routes,
    dashboard_routes,
    event_routes,
    feed_routes,
    moderation_routes,
    student_event_routes,
    team_routes,
    user_routes,
)

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Intramural Sports Portal API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


def error_response(error: PortalError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={'error': error.message})


@app.exception_handler(PortalError)
async def handle_portal_error(request: Request, exc: PortalError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(ValidationFailed(describe_validation_errors(exc.errors())))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Unhandled database error on %s %s', request.method, request.url.path)
    return error_response(Internal())


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'Intramural Sports Portal API Running'}


app.include_router(announcement_routes.router, prefix='/admin/announcements')
app.include_router(event_routes.router, prefix='/admin/events')
app.include_router(team_routes.router, prefix='/admin/teams')
app.include_router(user_routes.router, prefix='/admin/users')
app.include_router(moderation_routes.router, prefix='/admin/posts')
app.include_router(feed_routes.router, prefix='/student/feed')
app.include_router(student_event_routes.router, prefix='/student/events')
app.include_router(dashboard_routes.router)
