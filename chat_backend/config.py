import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# chat_backend/config.py -> parent.parent = project root
AUTH_DB_PATH = Path(os.getenv("AUTH_DB_PATH", Path(__file__).resolve().parent.parent / "auth.db"))

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
TOKEN_EXPIRE_MINUTES = int(os.getenv("TOKEN_EXPIRE_MINUTES", "60"))

CLIENT_ORIGIN = os.getenv("CLIENT_ORIGIN", "http://localhost:8501")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
