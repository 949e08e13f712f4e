from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tempo.api.settings import router as settings_router
from tempo.api.workouts import router as workouts_router
from tempo.core.config import settings
from tempo.core.errors import InvalidArgument, ZoneSettingsError
from tempo.core.logging import configure_logging
from tempo.db import Base, engine
from tempo.models.user_settings import UserSettings  # noqa: F401  (import ensures table is registered)
from tempo.models.workout import Workout  # noqa: F401
from tempo.models.workout_time_series import WorkoutTimeSeries  # noqa: F401


configure_logging(settings.log_level, settings.log_format)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app.include_router(settings_router)
app.include_router(workouts_router)


@app.exception_handler(ZoneSettingsError)
async def zone_settings_error_handler(request: Request, exc: ZoneSettingsError):
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "kind": exc.kind},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are invalid arguments too; report the first problem
    err = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    message = err.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "detail": f"{where}: {message}" if where else message,
            "kind": InvalidArgument.kind,
        },
    )


@app.get("/")
def root():
    return {"message": "Tempo backend is running"}
