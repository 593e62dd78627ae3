import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Database
MONGODB_URI = os.environ.get("MONGODB_URI")
DB_NAME = os.environ.get("DB_NAME", "project_ruby")

# Mock mode (for testing without API key)
MOCK_MODE = os.environ.get("MOCK_MODE", "false").lower() == "true"

# OpenRouter gateway
OPENROUTER_BASE_URL = os.environ.get("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
APP_URL = os.environ.get("APP_URL", "http://localhost:3000")
APP_TITLE = "Project Ziio"

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

# PDF pipeline
MAX_PDF_PAGES = int(os.environ.get("MAX_PDF_PAGES", "20"))
PDF_RENDER_ZOOM = 2.0

MODELS = {
    # Vision model for document analysis
    "VISION": "meta-llama/llama-3.2-90b-vision-instruct:free",
    # Primary text analysis model
    "FILE_ANALYSIS": "meta-llama/llama-3.1-405b-instruct:free",
    "TEXT_BACKUP": "meta-llama/llama-3.1-70b-instruct:free",
    # Chat model for interactive analysis
    "CHAT": "openchat/openchat-7b:free",
    "CHAT_BACKUP": "mistralai/mistral-7b-instruct:free",
    "PROOFREAD": "meta-llama/llama-3.2-3b-instruct:free",
    "PROOFREAD_BACKUP": "mistralai/mistral-7b-instruct:free",
    "ARTICLE_WRITING": "meta-llama/llama-3.1-70b-instruct:free",
}

# Statuses that trigger the single fallback-model retry
FALLBACK_STATUS_CODES = (429, 503)


def get_api_key():
    key = os.environ.get("OPENROUTER_API_KEY")
    if key:
        return key
    env_path = Path(__file__).parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                if line.startswith("OPENROUTER_API_KEY="):
                    key = line.split("=", 1)[1].strip()
                    if key:
                        return key
    home_config = Path.home() / ".openrouter" / "api_key"
    if home_config.exists():
        return home_config.read_text().strip()
    return None
