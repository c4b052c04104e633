import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    database_url: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./inventory.db"
    )
    database_echo: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"

    # Recompute every item's cached quantity/status from the ledger at startup
    reconcile_on_startup: bool = os.getenv("RECONCILE_ON_STARTUP", "True").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
