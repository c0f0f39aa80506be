from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from pulse.core.errors import NotFoundError, PulseValidationError
from pulse.routers import health, tasks, notifications, visions, goals, dossier, sync

app = FastAPI(
    title="Pulse API",
    version="0.1.0"
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
app.include_router(notifications.router)
app.include_router(visions.router)
app.include_router(goals.router)
app.include_router(dossier.router)
app.include_router(sync.router)


# Erreurs levées par les commandes -> codes HTTP
@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(PulseValidationError)
def rejected_handler(request: Request, exc: PulseValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
def invalid_handler(request: Request, exc: ValidationError):
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)},
    )
