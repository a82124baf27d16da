from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./pastemd.db"
    sql_echo: bool = False

    # Cache in front of the database
    cache_backend: Literal["memory", "memcached"] = "memory"
    cache_max_entries: int = Field(10000, ge=1)
    memcached_servers: str = "127.0.0.1:11211"

    view_mode: Literal["open_multiple", "authenticated_once"] = "open_multiple"

    # Identity provider (session cookie carrying a signed token)
    auth_enabled: bool = False
    paste_ownership: bool = False
    auth_cookie: str = "__Secure-Token"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    documents_enabled: bool = False

    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8080

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def memcached_server_list(self) -> List[str]:
        return [s.strip() for s in self.memcached_servers.split(",") if s.strip()]


settings = Settings()
