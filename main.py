from fastapi import FastAPI
from dotenv import load_dotenv
import os
import logging
from routers import minutes, settings, upload
from services.minutes_generator import DEFAULT_MODEL

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def validate_environment():
    """
    Log the configuration the service will run with.

    Nothing here is fatal: without REDIS_URL the local default is used, and the
    OpenAI key is supplied at runtime through /settings/api-key or a header.
    """
    redis_url = os.getenv("REDIS_URL")
    model = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
    base_url = os.getenv("OPENAI_BASE_URL")

    logger.info("=" * 60)
    logger.info("Meeting minutes service configuration")
    logger.info(f"  OpenAI model: {model}")
    logger.info(f"  OpenAI endpoint: {base_url or 'default'}")
    if redis_url:
        logger.info("  Credential/distribution store: REDIS_URL")
    else:
        logger.warning("  REDIS_URL not set, using redis://localhost:6379")
    logger.info("=" * 60)


validate_environment()

app = FastAPI(title="Meeting Minutes Generator")

app.include_router(upload.router)
app.include_router(minutes.router)
app.include_router(settings.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
