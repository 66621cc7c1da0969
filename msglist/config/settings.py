from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    es_host: str = "localhost"
    es_port: int = 9200
    es_scheme: str = "http"
    es_timeout: float = 60.0

    index_prefix: str = "graylog"
    stream_index_prefixes: dict[str, str] = {}

    # Read once at startup, passed into QueryBuilder
    allow_highlighting: bool = False

    # "elasticsearch" or "file"
    field_types_source: str = "elasticsearch"
    field_types_path: str = "field_types.json"

    default_limit: int = 150
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
