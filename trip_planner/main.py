import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from trip_planner.config import settings
from trip_planner.core.gate import AuthGateMiddleware
from trip_planner.core.rate_limit import limiter
from trip_planner.modules.auth import routes as auth_routes
from trip_planner.modules.profiles import routes as profiles_routes
from trip_planner.modules.trips import routes as trips_routes
from trip_planner.modules.activities import routes as activities_routes
from trip_planner.modules.admin import routes as admin_routes
from trip_planner.modules.feedback import routes as feedback_routes
from trip_planner.modules.places import routes as places_routes
from trip_planner.modules.status import routes as status_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


# Added first so it runs innermost, after CORS preflights are answered
app.add_middleware(AuthGateMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(status_routes.router)
app.include_router(auth_routes.router)
app.include_router(profiles_routes.router)
app.include_router(trips_routes.router)
app.include_router(activities_routes.router)
app.include_router(admin_routes.router)
app.include_router(feedback_routes.router)
app.include_router(places_routes.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("SUPABASE_URL / SUPABASE_KEY not set; auth and storage will not work")
    if not settings.google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY not set; /api/places will return 500")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to trip-planner", "status": "healthy"}
