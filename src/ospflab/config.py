# src/ospflab/config.py
# Configuración desde entorno (.env soportado vía python-dotenv)
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import os

from dotenv import load_dotenv


def _split(raw: str) -> List[str]:
    return [x.strip() for x in raw.split(",") if x.strip()]


@dataclass
class Settings:
    topo_path: str = "configs/network_data.json"
    topo_backend: str = "file"          # file | redis
    redis_key: str = "ospf:topology"
    http_host: str = "127.0.0.1"
    http_port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        backend = os.getenv("OSPF_TOPO_BACKEND", "file").lower()
        if backend not in ("file", "redis"):
            raise ValueError(f"OSPF_TOPO_BACKEND no soportado: {backend}")
        return cls(
            topo_path=os.getenv("OSPF_TOPO_PATH", cls.topo_path),
            topo_backend=backend,
            redis_key=os.getenv("OSPF_REDIS_KEY", cls.redis_key),
            http_host=os.getenv("OSPF_HTTP_HOST", cls.http_host),
            http_port=int(os.getenv("OSPF_HTTP_PORT", str(cls.http_port))),
            cors_origins=_split(os.getenv("OSPF_CORS_ORIGINS", "http://localhost:5173")),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )
