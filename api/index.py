import logging
from cinestream.main import app

# Setup basic logging to capture errors in serverless logs
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("api/index.py initialized")

# Entry point for serverless deployments; exports the FastAPI app instance
