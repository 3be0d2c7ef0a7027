#!/usr/bin/env python3

from pathlib import Path
from typing import Tuple

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    # Listen address, host:port. An empty host listens on all interfaces.
    addr: str = "localhost:8080"

    licenses_dir: Path = PACKAGE_DIR / "licenses"
    templates_dir: Path = PACKAGE_DIR / "templates"
    static_dir: Path = PACKAGE_DIR / "static"

    log_level: str = "INFO"
    request_logging_enabled: bool = True

    @property
    def host(self) -> str:
        return self._split_addr()[0]

    @property
    def port(self) -> int:
        return self._split_addr()[1]

    def _split_addr(self) -> Tuple[str, int]:
        host, sep, port = self.addr.strip().rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"YNAL_ADDR must be host:port, got {self.addr!r}")
        return host.strip("[]") or "0.0.0.0", int(port)

    class Config:
        env_file = ".env"
        env_prefix = "YNAL_"
        env_ignore_empty = True
        extra = "ignore"


settings = Settings()
