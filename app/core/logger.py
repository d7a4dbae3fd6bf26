# core/logger.py
import logging

from app.core.config import settings

logger = logging.getLogger("tripplanner")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

# uvicorn --reload imports the app twice; one handler is enough
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")
    )
    logger.addHandler(console_handler)
