"""
Connectivity check for the configured model.

Run: python -m text2query.check_model
"""
import asyncio
import logging
import sys

from text2query.conversion.gateway import build_gateway
from text2query.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

CHECK_PROMPT = "Reply with the single word: ready"


async def check_model(settings: Settings) -> bool:
    logger.info(
        "Testing model | model=%s | ollama=%s",
        settings.OLLAMA_MODEL.value,
        settings.OLLAMA_BASE_URL,
    )
    gateway = build_gateway(settings)
    if gateway is None:
        logger.error("Model client could not be constructed; check OLLAMA_* settings")
        return False

    outcome = await gateway.invoke(CHECK_PROMPT)
    if not outcome.ok:
        logger.error("Model call failed: %s", outcome.error)
        if "401" in str(outcome.error) or "403" in str(outcome.error):
            logger.error("Possible issue: OLLAMA_API_KEY is invalid or not set")
        elif "404" in str(outcome.error):
            logger.error("Possible issue: model %s is not available on the server",
                         settings.OLLAMA_MODEL.value)
        return False

    logger.info("Model is reachable | response=%s", outcome.completion)
    return True


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)-7s %(message)s")
    return 0 if asyncio.run(check_model(get_settings())) else 1


if __name__ == "__main__":
    sys.exit(main())
