import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = "rentaldb"
    # Core settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./rentaldb.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

    # Sample data
    SEED_PASSWORD: str = os.getenv("SEED_PASSWORD", "password123")

settings = Settings()
