from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv
import os

# Load the project .env regardless of CWD; real environment variables win
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
ENV_PATH = os.path.join(BASE_DIR, ".env")
load_dotenv(ENV_PATH)

class Settings(BaseSettings):
    database_url: str = Field(default="", alias="DATABASE_URL")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Device-local key/value store for cart and wishlist blobs
    store_dir: str = Field(default="./.storefront", alias="STORE_DIR")
    cart_storage_key: str = Field(default="storefront_cart", alias="CART_STORAGE_KEY")
    wishlist_storage_key: str = Field(default="storefront_wishlist", alias="WISHLIST_STORAGE_KEY")

    # Totals
    shipping_threshold: float = Field(default=500.0, alias="SHIPPING_THRESHOLD")
    shipping_fee: float = Field(default=40.0, alias="SHIPPING_FEE")

    # Search
    fuzzy_threshold: float = Field(default=0.4, alias="FUZZY_THRESHOLD")
    fuzzy_min_match_length: int = Field(default=2, alias="FUZZY_MIN_MATCH_LENGTH")

    payment_delay_seconds: float = Field(default=2.0, alias="PAYMENT_DELAY_SECONDS")

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True

def get_settings() -> "Settings":
    return Settings()
