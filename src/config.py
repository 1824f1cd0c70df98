from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.watchlist import MonitoredProduct, WatchlistEntry

DEFAULT_PORT = 10000


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Hot Wheels monitor"

    # Liveness server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Storage
    store_path: str = "products.json"

    # Scraping
    matching_strategy: str = "fixed_list"  # fixed_list / search / listing_page
    base_url: str = "https://www.firstcry.com"
    search_url: str = "https://www.firstcry.com/search?q={query}"
    listing_url: str = "https://www.firstcry.com/hot-wheels/5/0/113?sort=popularity"
    request_timeout: int = 10
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    )
    default_category: str = "Hot Wheels"
    enforce_keyword_filter: bool = False
    monitored_products: List[MonitoredProduct] = [
        MonitoredProduct(
            name="Hot Wheels Die Cast Free Wheel Fat Ride Bike Green and Black",
            url=(
                "https://www.firstcry.com/hot-wheels/"
                "hot-wheels-die-cast-free-wheel-fat-ride-bike-green-and-black/"
                "2232875/product-detail"
            ),
        ),
    ]
    watchlist: List[WatchlistEntry] = [
        WatchlistEntry(name="Hot Wheels Cars", keywords=["hot wheels", "car"]),
        WatchlistEntry(name="Hot Wheels Track Sets", keywords=["track", "set"]),
    ]

    # Scheduler
    schedule_cron: str = "*/5 * * * *"
    monitor_enabled: bool = True

    # Notifications
    notification_enabled: bool = True
    currency_symbol: str = "₹"
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_whatsapp_number: str = ""
    your_whatsapp_number: str = ""
    other_whatsapp_number_1: str = ""
    # Extra recipients (comma-separated)
    whatsapp_recipients: str = ""

    @field_validator("port", mode="before")
    @classmethod
    def _fallback_port(cls, value):
        try:
            return int(value)
        except (TypeError, ValueError):
            return DEFAULT_PORT

    @property
    def recipients(self) -> List[str]:
        candidates = [self.your_whatsapp_number, self.other_whatsapp_number_1]
        candidates.extend(self.whatsapp_recipients.split(","))

        recipients: List[str] = []
        for number in candidates:
            number = number.strip()
            if number and number not in recipients:
                recipients.append(number)
        return recipients


@lru_cache
def get_settings() -> Settings:
    return Settings()
