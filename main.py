import uvicorn, logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from app.config.settings import Settings, settings
from app.database.connection import create_storage
from app.services.ai_service import create_ai_client
from app.services.chat_service import ChatService
from app.services.geocoding_service import GeocodingService
from app.services.image_service import create_image_generator

from app.routes.auth_route import router as auth_route
from app.routes.user_route import router as user_route
from app.routes.chat_route import router as chat_route
from app.routes.favorites_route import router as favorites_route
from app.routes.travel_info_route import router as travel_info_route
from app.routes.image_route import router as image_route

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('app.log')
    ]
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, ai_client=None, image_generator=None,
               geocoding_service=None) -> FastAPI:
    """
    Build the API. Collaborators not passed in are created from app_settings
    when the application starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = app_settings
        storage = create_storage()
        app.state.storage = storage
        app.state.chat_service = ChatService(ai_client or create_ai_client(app_settings), storage)
        app.state.image_generator = image_generator or create_image_generator(app_settings)
        app.state.geocoding_service = geocoding_service or GeocodingService(
            nominatim_url=app_settings.NOMINATIM_URL,
            openroute_url=app_settings.OPENROUTE_GEOCODE_URL,
            openroute_api_key=app_settings.OPENROUTE_API_KEY,
            timeout=app_settings.HTTP_TIMEOUT,
        )
        logger.info("Travel assistant started")
        yield
        storage.clear()
        logger.info("Travel assistant stopped")

    app = FastAPI(
        title="Travel Assistant API",
        description="Chat-based travel assistant with weather, culture, transportation and image panels",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SessionMiddleware, secret_key=app_settings.SESSION_SECRET_KEY)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', []))}: {err.get('msg')}" for err in errors
        ) or "Invalid request"
        logger.warning(f"Validation error on {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # register the routes
    app.include_router(auth_route, prefix="/api")
    app.include_router(user_route, prefix="/api")
    app.include_router(chat_route, prefix="/api")
    app.include_router(favorites_route, prefix="/api")
    app.include_router(travel_info_route, prefix="/api")
    app.include_router(image_route, prefix="/api")

    @app.get("/")
    def root():
        return {"message": "Travel assistant backend is running"}

    return app


app = create_app()


if __name__ == "__main__" :
    uvicorn.run(app, host = "0.0.0.0", port = 9090, log_level = "info")
