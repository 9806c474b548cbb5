import os

# Application Metadata
PROJECT_NAME = "Blanquita IA Kitchen Inventory"
VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Generative model service (Gemini REST API)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-pro-preview")
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
MODEL_TIMEOUT = float(os.getenv("MODEL_TIMEOUT", 60)) # Seconds before a model call is abandoned

# Thinking budgets (tokens) handed to the model
CHAT_THINKING_BUDGET = int(os.getenv("CHAT_THINKING_BUDGET", 16000)) # Only when deep reasoning is on
SUGGESTION_THINKING_BUDGET = int(os.getenv("SUGGESTION_THINKING_BUDGET", 24000))

# Alerting
PRUNE_RESOLVED_ALERTS = os.getenv("PRUNE_RESOLVED_ALERTS", "false").lower() in ("1", "true", "yes")
EXPIRY_WARNING_DAYS = int(os.getenv("EXPIRY_WARNING_DAYS", 7))

# Load the demo kitchen on startup
SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() in ("1", "true", "yes")

# Fixed texts substituted when the model service fails or answers empty
CHAT_FALLBACK = "No se pudo procesar el análisis."
SUGGESTION_FALLBACK = "Sugerencia no disponible."
IMAGE_FALLBACK = "Análisis visual fallido."
