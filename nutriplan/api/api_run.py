from fastapi import FastAPI
from fastapi.routing import APIRoute
import logging

from nutriplan.api.routes import catalog, plan, shopping
from nutriplan.infra.Meal_Catalog import get_catalog
from nutriplan.infra.Pack_Size_Registry import get_registry

# Logging
logger = logging.getLogger("nutriplan_app")

# Initialize FastAPI app
app = FastAPI(title="Nutrition Plan & Shopping List API")

# Include routers
app.include_router(plan.router)
app.include_router(shopping.router)
app.include_router(catalog.router)


@app.on_event("startup")
def _load_static_data():
    """Load the meal catalog and pack-size registry once, before the first request."""
    catalog_ = get_catalog()
    registry = get_registry()
    logger.info("Static data ready: %r, %d pack sizes", catalog_, len(registry))


@app.get("/")
def index():
    return {
        "service": app.title,
        "endpoints": sorted({route.path for route in app.routes
                            if isinstance(route, APIRoute) and route.path.startswith("/api")}),
    }
