"""Text-to-speech narration through the ElevenLabs streaming API."""
import logging
from typing import AsyncIterator, Optional

import httpx

from mealstretch.utilities.config import ELEVENLABS_MODEL_ID, ELEVENLABS_VOICE_ID, PROVIDER_TIMEOUT_SECONDS
from mealstretch.utilities.constants import ELEVENLABS_TTS_URL
from mealstretch.utilities.errors import FeatureNotConfiguredError, ProviderError

logger = logging.getLogger(__name__)


class Narrator:
    def __init__(self, api_key: Optional[str], voice_id: str = ELEVENLABS_VOICE_ID,
                 model_id: str = ELEVENLABS_MODEL_ID, timeout: float = PROVIDER_TIMEOUT_SECONDS,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.voice_id = voice_id
        self.model_id = model_id
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def open_stream(self, text: str) -> AsyncIterator[bytes]:
        """Start synthesis and return an iterator over the audio/mpeg body.

        Upstream errors surface here, before any audio has been sent, so the
        caller can still answer with a JSON error.
        """
        if not self.configured:
            raise FeatureNotConfiguredError("Narration is not configured: set ELEVENLABS_API_KEY")
        http = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        request = http.build_request(
            "POST",
            ELEVENLABS_TTS_URL.format(voice_id=self.voice_id),
            headers={"xi-api-key": self.api_key, "Accept": "audio/mpeg"},
            json={"text": text, "model_id": self.model_id},
        )
        try:
            response = await http.send(request, stream=True)
        except httpx.TimeoutException as e:
            await http.aclose()
            logger.warning("Narration provider timed out")
            raise FeatureNotConfiguredError("Narration provider is unavailable (timed out)") from e
        except httpx.HTTPError as e:
            await http.aclose()
            logger.error("Narration request failed: %s", e)
            raise ProviderError("Failed to generate voice") from e

        if response.status_code != 200:
            try:
                body = await response.aread()
            except httpx.HTTPError as e:
                logger.error("ElevenLabs returned HTTP %s, body unreadable: %s", response.status_code, e)
                raise ProviderError(f"Failed to generate voice (provider returned HTTP {response.status_code})") from e
            finally:
                await response.aclose()
                await http.aclose()
            logger.error("ElevenLabs returned HTTP %s: %s", response.status_code, body[:200])
            raise ProviderError(f"Failed to generate voice (provider returned HTTP {response.status_code})")
        return self._iter_audio(http, response)

    @staticmethod
    async def _iter_audio(http: httpx.AsyncClient, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        finally:
            await response.aclose()
            await http.aclose()
