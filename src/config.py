from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Bidding database
    database_url: str = "postgresql+asyncpg://postgres@127.0.0.1:5432/bid_db"
    # Creates tables on startup; meant for local runs and tests, use alembic elsewhere
    create_schema_on_startup: bool = False

    # Chat gateway
    chat_gateway_create_room_url: str = "https://gateway.chotot.org/v2/public/chat/room/create"
    chat_gateway_send_message_url: str = "https://gateway.chotot.org/v2/public/chat/message/send"
    chat_gateway_owner: str = "bid-orchestrator"
    chat_gateway_timeout_seconds: float = 5.0

    # Event bus; events are discarded when unset
    rabbitmq_url: str | None = None

    ranking_default_limit: int = 10
    ranking_max_limit: int = 100

    log_level: str = "INFO"
