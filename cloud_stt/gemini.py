"""Google Gemini Cloud-STT Provider.

Modellkatalog und Verbindungstest über das google-genai SDK.
"""

import logging

from config import CONNECTION_TEST_TIMEOUT, DEFAULT_GEMINI_STT_MODEL
from utils.timing import timed_operation

from .models import CloudSTTModel, CloudSTTProvider

logger = logging.getLogger("contextbridge.cloud_stt.gemini")

PROVIDER = CloudSTTProvider(
    id="gemini",
    label="Google Gemini",
    description="Fast and affordable",
    base_url="https://generativelanguage.googleapis.com",
    api_key_url="https://aistudio.google.com/apikey",
    default_model=DEFAULT_GEMINI_STT_MODEL,
    models=(
        CloudSTTModel("gemini-2.0-flash", "Gemini 2.0 Flash", "Fast and capable - Recommended"),
        CloudSTTModel(
            "gemini-2.5-flash-preview-05-20",
            "Gemini 2.5 Flash Preview",
            "Latest preview with improved accuracy",
        ),
        CloudSTTModel(
            "gemini-2.5-pro-preview-05-06",
            "Gemini 2.5 Pro Preview",
            "Most accurate, higher latency",
        ),
        CloudSTTModel("gemini-1.5-flash", "Gemini 1.5 Flash", "Stable version"),
    ),
)


def test_connection(api_key: str) -> bool:
    """Prüft den Key mit einer minimalen Generierung ("Say 'ok'").

    Returns:
        True bei Erfolg, False bei ungültigem Key oder Netzwerkfehler
    """
    import httpx
    from google import genai
    from google.genai import errors, types

    client = genai.Client(
        api_key=api_key,
        # google-genai erwartet den Timeout in Millisekunden
        http_options=types.HttpOptions(timeout=int(CONNECTION_TEST_TIMEOUT * 1000)),
    )
    try:
        with timed_operation("Gemini-Verbindungstest", logger=logger, include_session=False):
            client.models.generate_content(model=DEFAULT_GEMINI_STT_MODEL, contents="Say 'ok'")
    except errors.ClientError as e:
        if "API key" in str(e):
            logger.warning("Gemini-Verbindungstest: ungültiger API-Key")
        else:
            logger.warning(f"Gemini-Verbindungstest fehlgeschlagen: {e}")
        return False
    except errors.APIError as e:
        logger.warning(f"Gemini-Verbindungstest fehlgeschlagen: {e}")
        return False
    except httpx.TimeoutException:
        logger.warning("Gemini-Verbindungstest: Timeout")
        return False
    except httpx.HTTPError as e:
        logger.warning(f"Gemini-Verbindungstest: Netzwerkfehler: {e}")
        return False

    logger.info("Gemini-Verbindungstest erfolgreich")
    return True


__all__ = ["PROVIDER", "test_connection"]
