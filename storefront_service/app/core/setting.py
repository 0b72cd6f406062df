"""
Storefront Service configuration using shared patterns
"""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the storefront service directory path
STOREFRONT_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = STOREFRONT_SERVICE_DIR / ".env"


class StorefrontSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "MyKart Storefront"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "storefront-service"
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Database
    DB_USER: str = "admin"
    DB_PASSWORD: str = "password123"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "mykart"
    DATABASE_URL: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # Interaction tracking
    TRACKING_SINK: Literal["database", "kafka"] = "database"

    # Kafka for events
    KAFKA_BOOTSTRAP_SERVERS: str = "localhost:9092"
    KAFKA_TOPIC_PAGE_HITS: str = "page-hits"
    KAFKA_TOPIC_CLICKS: str = "clicks"
    KAFKA_TOPIC_IMPRESSIONS: str = "impressions"
    KAFKA_TOPIC_CART_EVENTS: str = "cart-events"
    KAFKA_CONNECT_RETRIES: int = 5
    KAFKA_RETRY_DELAY: float = 2.0

    # Catalog
    DEFAULT_PAGE_SIZE: int = 20

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = False
    CORS_METHODS: List[str] = ["*"]
    CORS_HEADERS: List[str] = ["*"]

    # React client build served in production
    CLIENT_BUILD_DIR: str = "client/build"

    @property
    def database_url(self) -> str:
        """Explicit DATABASE_URL wins over the assembled PostgreSQL URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def kafka_topics(self) -> dict[str, str]:
        """Map interaction event type to its Kafka topic"""
        return {
            "page_hit": self.KAFKA_TOPIC_PAGE_HITS,
            "click": self.KAFKA_TOPIC_CLICKS,
            "impression": self.KAFKA_TOPIC_IMPRESSIONS,
            "cart_event": self.KAFKA_TOPIC_CART_EVENTS,
        }


# Create a singleton instance
_settings_instance = None


def get_settings() -> StorefrontSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = StorefrontSettings()
    return _settings_instance
