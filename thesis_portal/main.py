from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from thesis_portal.core.config import settings
from thesis_portal.core.errors import register_error_handlers
from thesis_portal.core.logging_config import setup_logging
import thesis_portal.models.registry  # noqa: F401
from thesis_portal.routers import (
    ping, auth, proposals, applications, notifications, virtual_clock, thesis_requests,
)

def custom_generate_unique_id(route):
    return f"{route.tags[0]}_{route.name}" if route.tags else route.name

setup_logging()

app = FastAPI(title="Thesis Management",
    version="1.0.0",
    generate_unique_id_function=custom_generate_unique_id,)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(ping.router)
app.include_router(auth.router)
app.include_router(proposals.router)
app.include_router(applications.router)
app.include_router(notifications.router)
app.include_router(virtual_clock.router)
app.include_router(thesis_requests.router)
