"""Error -> JSON response translation shared by every app in the package."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mealstretch.utilities.errors import MealStretchError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(MealStretchError)
    async def _mealstretch_error(request: Request, exc: MealStretchError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
