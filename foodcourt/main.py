### foodcourt/main.py
import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from foodcourt.api import vendor_routes, menu_routes, order_routes
from foodcourt.auth.dependencies import get_current_identity
from foodcourt.core.config import settings
from foodcourt.core.errors import register_error_handlers
from foodcourt.db import create_db_and_tables
import foodcourt.models  # registers all models via models/__init__.py
from sqlalchemy.orm import configure_mappers
configure_mappers()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Create the FastAPI app
app = FastAPI()

register_error_handlers(app)


# ✅ Swagger Bearer token support for "Authorize" button
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Food Court API",
        version="1.0.0",
        description="Order intake, pickup queue and order lifecycle for food court vendors.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    for path, operations in openapi_schema["paths"].items():
        if path == "/health":
            continue
        for operation in operations.values():
            operation["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

# ✅ Allow frontend (CORS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"status": "ok", "message": "Food Court API is running"}


@app.get(f"{API_PREFIX}/me")
async def whoami(identity=Depends(get_current_identity)):
    return {
        "data": {
            "user_id": identity.user_id,
            "role": identity.role.value,
            "vendor_id": identity.vendor_id,
        }
    }


@app.on_event("startup")
async def on_startup():
    log.info("🔧 Starting DB setup...")
    await create_db_and_tables()
    log.info("✅ DB schema ready.")


# ✅ Core app routers
app.include_router(vendor_routes.router, prefix=API_PREFIX)
app.include_router(menu_routes.router, prefix=API_PREFIX)
app.include_router(order_routes.router, prefix=API_PREFIX)
