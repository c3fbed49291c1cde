"""Narration endpoint for the disaster simulator.

The router is mounted on the main app; ``app`` below also serves it alone,
which is how the simulator's own backend runs it.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI
from fastapi.responses import StreamingResponse

from mealstretch.api.handlers import register_error_handlers
from mealstretch.infra.Narrator_Client import Narrator
from mealstretch.utilities import config
from mealstretch.utilities.validators import NarrateInput, parse_input

router = APIRouter()
logger = logging.getLogger(__name__)


def get_narrator() -> Narrator:
    return Narrator(config.ELEVENLABS_API_KEY)


@router.post("/api/narrate")
async def api_narrate(payload: Any = Body(default=None), narrator: Narrator = Depends(get_narrator)):
    data = parse_input(NarrateInput, payload)
    audio = await narrator.open_stream(data.text)
    logger.info("Narrating %d characters", len(data.text))
    return StreamingResponse(audio, media_type="audio/mpeg")


# === Standalone simulator app ===
app = FastAPI(title="Disaster Simulator Narration")
register_error_handlers(app)
app.include_router(router)
