import os
from dataclasses import dataclass

@dataclass
class Settings:
    # App
    app_env: str = os.getenv("APP_ENV", "production")
    port: int = int(os.getenv("PORT", "8080"))
    log_level: str = os.getenv("LOG_LEVEL", "info")

    # CORS
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors_allow_credentials: bool = os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"
    cors_allow_headers: str = os.getenv("CORS_ALLOW_HEADERS", "Authorization,Content-Type")
    cors_allow_methods: str = os.getenv("CORS_ALLOW_METHODS", "GET,POST,OPTIONS")

    # Document
    jquery_url: str = os.getenv("JQUERY_URL", "http://ajax.googleapis.com/ajax/libs/jquery/1/jquery.min.js")
    cytoscape_url: str = os.getenv(
        "CYTOSCAPE_URL",
        "http://cytoscape.github.io/cytoscape.js/api/cytoscape.js-latest/cytoscape.min.js",
    )
    default_layout: str = os.getenv("DEFAULT_LAYOUT", "cose")
    document_title: str = os.getenv("DOCUMENT_TITLE", "Cytoscape.js initialisation")
    escape_values: bool = os.getenv("ESCAPE_VALUES", "true").lower() == "true"
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    # Cache
    cache_api_ttl: int = int(os.getenv("CACHE_API_TTL", "60"))

    # Redis
    enable_redis_cache: bool = os.getenv("ENABLE_REDIS_CACHE", "false").lower() == "true"
    redis_url: str = os.getenv("REDIS_URL", "redis://redis:6379/0")

def get_settings() -> Settings:
    return Settings()
