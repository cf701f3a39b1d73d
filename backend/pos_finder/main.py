from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos_finder.api.v1.routes.health import router as health_router
from pos_finder.api.v1.routes.points_of_sale import router as points_of_sale_router
from pos_finder.core.config import get_settings
from pos_finder.core.logging import configure_logging_if_needed

configure_logging_if_needed(get_settings().log_level)

app = FastAPI(title="Points of Sale API")

# Read-only public data: allow all origins so map frontends can call the API directly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/v1")
app.include_router(points_of_sale_router)
