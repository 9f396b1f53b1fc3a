import logging
from filmography.main import app

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("Filmography api/index.py initialized")
