import os

from dotenv import load_dotenv

load_dotenv()

API_URL = os.getenv("API_URL", "http://localhost:8000")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_API_URL = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")
# unset = wait indefinitely
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT")) if os.getenv("GEMINI_TIMEOUT") else None

TRANSCRIPT_PATH = os.getenv("TRANSCRIPT_PATH", ".chat_history.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
