"""OpenAI Cloud-STT Provider.

Modellkatalog und Verbindungstest über die OpenAI API.
"""

import logging

from config import CONNECTION_TEST_TIMEOUT, DEFAULT_OPENAI_STT_MODEL
from utils.timing import timed_operation

from .models import CloudSTTModel, CloudSTTProvider

logger = logging.getLogger("contextbridge.cloud_stt.openai")

PROVIDER = CloudSTTProvider(
    id="openai",
    label="OpenAI Whisper",
    description="Industry standard",
    base_url="https://api.openai.com",
    api_key_url="https://platform.openai.com/api-keys",
    default_model=DEFAULT_OPENAI_STT_MODEL,
    models=(
        CloudSTTModel("whisper-1", "Whisper", "OpenAI Whisper - Fast and accurate"),
        CloudSTTModel("gpt-4o-transcribe", "GPT-4o Transcribe", "Advanced transcription model"),
        CloudSTTModel(
            "gpt-4o-mini-transcribe",
            "GPT-4o Mini Transcribe",
            "Faster, more affordable transcription",
        ),
    ),
)


def test_connection(api_key: str) -> bool:
    """Prüft den Key über GET /v1/models.

    Returns:
        True bei Erfolg, False bei ungültigem Key oder Netzwerkfehler
    """
    from openai import APIConnectionError, APIError, APITimeoutError, AuthenticationError, OpenAI

    # Eigener Client pro Test: der Key ist ungespeichert und darf nirgends hängen bleiben
    client = OpenAI(api_key=api_key, timeout=CONNECTION_TEST_TIMEOUT, max_retries=0)
    try:
        with timed_operation("OpenAI-Verbindungstest", logger=logger, include_session=False):
            client.models.list()
    except AuthenticationError:
        logger.warning("OpenAI-Verbindungstest: ungültiger API-Key")
        return False
    except APITimeoutError:
        logger.warning("OpenAI-Verbindungstest: Timeout")
        return False
    except APIConnectionError as e:
        logger.warning(f"OpenAI-Verbindungstest: Netzwerkfehler: {e}")
        return False
    except APIError as e:
        logger.warning(f"OpenAI-Verbindungstest fehlgeschlagen: {e}")
        return False
    finally:
        client.close()

    logger.info("OpenAI-Verbindungstest erfolgreich")
    return True


__all__ = ["PROVIDER", "test_connection"]
