import logging
from app.main import app

# Root logging for the serverless runtime; modules only create named loggers
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs every request URL at INFO, and TMDb URLs carry the api_key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

logger.info("Movie browser entry point ready (%d routes)", len(app.routes))

__all__ = ["app"]
