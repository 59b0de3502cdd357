import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    database_url: str = "sqlite+aiosqlite:///./villa.db"

    # HTTP surface
    api_prefix: str = "/api"
    frontend_url: str = "http://localhost:3000"

    # Villa defaults, materialised into the settings row on first read
    default_price_per_night: float = 250
    default_max_guests: int = 8
    default_cleaning_fee: float = 50
    default_tax_rate: float = 0.12
    default_min_stay_nights: int = 2

    # Pricing behavior
    # Seasonal windows are stored but only applied to quotes when enabled
    seasonal_pricing_enabled: bool = False

    # Demo data
    seed_on_startup: bool = False

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_default: str = "100/15minutes"

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold


settings = Settings(
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./villa.db"),
    api_prefix=os.environ.get("API_PREFIX", "/api").rstrip("/"),
    frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:3000"),
    default_price_per_night=float(os.environ.get("DEFAULT_PRICE_PER_NIGHT", "250")),
    default_max_guests=int(os.environ.get("DEFAULT_MAX_GUESTS", "8")),
    default_cleaning_fee=float(os.environ.get("DEFAULT_CLEANING_FEE", "50")),
    default_tax_rate=float(os.environ.get("DEFAULT_TAX_RATE", "0.12")),
    default_min_stay_nights=int(os.environ.get("DEFAULT_MIN_STAY_NIGHTS", "2")),
    seasonal_pricing_enabled=os.environ.get("SEASONAL_PRICING_ENABLED", "false").lower()
    == "true",
    seed_on_startup=os.environ.get("SEED_ON_STARTUP", "false").lower() == "true",
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_default=os.environ.get("RATE_LIMIT_DEFAULT", "100/15minutes"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
