"""FastAPI application exposing the restaurant analytics."""

import logging
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from restaurantiq.api.routes.analytics import router as analytics_router
from restaurantiq.api.routes.assessment import router as assessment_router
from restaurantiq.api.routes.data_import import router as import_router
from restaurantiq.api.routes.demo import router as demo_router
from restaurantiq.api.routes.menu import router as menu_router
from restaurantiq.api.routes.suppliers import router as suppliers_router
from restaurantiq.config.settings import get_settings

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="RestaurantIQ")
logger = logging.getLogger(__name__)

# Include Routers
app.include_router(analytics_router)
app.include_router(suppliers_router)
app.include_router(menu_router)
app.include_router(assessment_router)
app.include_router(import_router)
app.include_router(demo_router)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("restaurantiq.main:app", host="127.0.0.1", port=8000, reload=True)
