from __future__ import annotations

import os

from craft_price_advisor.advisor import PricingAdvisor
from craft_price_advisor.gemini_adapter import DEFAULT_MODEL, GeminiAdviceClient
from craft_price_advisor.logging_config import setup_logging
from craft_price_advisor.webapp import create_app

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
VERTEX_LOCATION = os.getenv("VERTEX_LOCATION", "us-central1")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)

# API key when set, Vertex AI on the project otherwise
advice_client = GeminiAdviceClient(
    api_key=GEMINI_API_KEY,
    project_id=PROJECT_ID,
    location=VERTEX_LOCATION,
    model_name=GEMINI_MODEL,
)
advisor = PricingAdvisor(client=advice_client)

app = create_app(advisor)
