import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_csv(value: str) -> list[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


class Settings:
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS
    ALLOWED_ORIGINS: list[str] = _split_csv(
        os.getenv("ALLOWED_ORIGINS", "*")
    )

    # Paging defaults for GET /api/products
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    DEFAULT_SORT: str = os.getenv("DEFAULT_SORT", "name")

    # Outbound products API client
    PRODUCTS_API_URL: str = os.getenv("PRODUCTS_API_URL", "").rstrip("/")
    PRODUCTS_API_TIMEOUT: int = int(os.getenv("PRODUCTS_API_TIMEOUT", "30"))


settings = Settings()
