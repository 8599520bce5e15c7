# backend/app/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Default to a local SQLite file; any SQLAlchemy URL (e.g. Postgres) works
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///backend/data/app.db")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

# Full generateContent URL of the Gemini model, including the API key
GEMINI_API_URL = os.getenv("GEMINI_API_URL")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
