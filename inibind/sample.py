"""Sample configuration shape with `[mysql]` and `[redis]` sections.

Used as the default `--schema` of the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .schema import ini_field


@dataclass(slots=True)
class MysqlConfig:
    """MySQL connection settings."""

    address: str = ini_field("address", default="")
    port: int = ini_field("port", default=0)
    username: str = ini_field("username", default="")
    password: str = ini_field("password", default="")


@dataclass(slots=True)
class RedisConfig:
    """Redis connection settings."""

    host: str = ini_field("host", default="")
    port: int = ini_field("port", default=0)
    password: str = ini_field("password", default="")
    database: int = ini_field("database", default=0)
    test: bool = ini_field("test", default=False)


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration with one field per section."""

    mysql: MysqlConfig = field(default_factory=MysqlConfig, metadata={"ini": "mysql"})
    redis: RedisConfig = field(default_factory=RedisConfig, metadata={"ini": "redis"})
