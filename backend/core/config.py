import os
from dotenv import load_dotenv

load_dotenv()


# Allowed auto-refresh intervals (seconds) offered by the dashboard selector.
REFRESH_INTERVALS = (15, 30, 60, 120, 300)


class Settings:
    # Clover endpoints. Credentials are never read from the environment:
    # they are entered through /sync/connect and kept in memory only.
    clover_sandbox_url: str = os.getenv("CLOVER_SANDBOX_URL", "https://sandbox.dev.clover.com")
    clover_production_url: str = os.getenv("CLOVER_PRODUCTION_URL", "https://api.clover.com")
    clover_timeout: float = float(os.getenv("CLOVER_TIMEOUT", "30"))
    clover_items_page_limit: int = int(os.getenv("CLOVER_ITEMS_PAGE_LIMIT", "200"))
    clover_categories_page_limit: int = int(os.getenv("CLOVER_CATEGORIES_PAGE_LIMIT", "100"))

    # Auto refresh
    refresh_interval_seconds: int = int(os.getenv("REFRESH_INTERVAL_SECONDS", "30"))
    auto_refresh: bool = os.getenv("AUTO_REFRESH", "True").lower() == "true"

    low_stock_threshold: int = int(os.getenv("LOW_STOCK_THRESHOLD", "5"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


settings = Settings()
