"""
Configuration settings for the ToDo Resource Service
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Id assignment: "length" keeps the len(collection) + 1 rule, "counter" never reuses an id
ID_STRATEGY_LENGTH = "length"
ID_STRATEGY_COUNTER = "counter"
ID_STRATEGIES = (ID_STRATEGY_LENGTH, ID_STRATEGY_COUNTER)
TODO_ID_STRATEGY = os.getenv("TODO_ID_STRATEGY", ID_STRATEGY_LENGTH).lower()

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

# Validate environment variables
if TODO_ID_STRATEGY not in ID_STRATEGIES:
    raise ValueError(f"TODO_ID_STRATEGY must be one of {', '.join(ID_STRATEGIES)}, got '{TODO_ID_STRATEGY}'")

logger.debug(f"Settings loaded - port: {PORT}, id strategy: {TODO_ID_STRATEGY}")
