from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from app.core.config import settings
from app.core.database import init_db
from app.core.logging import configure_logging
from app.core.realtime import RealtimeChannel
from app.core.uploads import LocalArtifactStore
from app.routers import notifications, parts, realtime, tasks

OPENAPI_TAGS = [
    {"name": "Parts", "description": "Register and look up parts by SAP code."},
    {"name": "Tasks", "description": "Create quality tasks and notify recipient roles."},
    {"name": "Notifications", "description": "Read, mark and clear notifications for a role."},
    {"name": "Realtime", "description": "WebSocket push of new notifications per role."},
]

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Quality management API. Tracks parts and inspection tasks, records a "
        "notification per recipient role for every task, and pushes new "
        "notifications to connected sessions of each role."
    ),
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.state.realtime = RealtimeChannel()
app.state.artifacts = LocalArtifactStore()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


app.include_router(parts.router, prefix="/v1/parts", tags=["Parts"])
app.include_router(tasks.router, prefix="/v1/tasks", tags=["Tasks"])
app.include_router(
    notifications.router,
    prefix="/v1/notifications",
    tags=["Notifications"],
)
app.include_router(realtime.router, prefix="/ws", tags=["Realtime"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
