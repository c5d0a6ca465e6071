from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from pydantic import BaseModel, ConfigDict

from poolguard.models.diagnostic import DiagnosticCode


class PoolKey(StrEnum):
    """Connection pool fields the checks understand."""

    MAX_OPEN_CONNECTIONS = "maxOpenConnections"
    MIN_IDLE_CONNECTIONS = "minIdleConnections"
    MAX_CONNECTION_LIFE_TIME = "maxConnectionLifeTime"


class ValueKind(StrEnum):
    INTEGER = "integer"
    FLOAT = "float"


class ValidationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: PoolKey
    value_kind: ValueKind
    default_text: str
    minimum: float
    code: DiagnosticCode


VALIDATION_RULES: Final[Mapping[PoolKey, ValidationRule]] = MappingProxyType(
    {
        PoolKey.MAX_OPEN_CONNECTIONS: ValidationRule(
            key=PoolKey.MAX_OPEN_CONNECTIONS,
            value_kind=ValueKind.INTEGER,
            default_text="1",
            minimum=1,
            code=DiagnosticCode.SQL_101,
        ),
        PoolKey.MIN_IDLE_CONNECTIONS: ValidationRule(
            key=PoolKey.MIN_IDLE_CONNECTIONS,
            value_kind=ValueKind.INTEGER,
            default_text="0",
            minimum=0,
            code=DiagnosticCode.SQL_102,
        ),
        PoolKey.MAX_CONNECTION_LIFE_TIME: ValidationRule(
            key=PoolKey.MAX_CONNECTION_LIFE_TIME,
            value_kind=ValueKind.FLOAT,
            default_text="30",
            minimum=30,
            code=DiagnosticCode.SQL_103,
        ),
    }
)

# Python-style spellings of the same fields.
KEY_ALIASES: Final[Mapping[str, PoolKey]] = MappingProxyType(
    {
        "max_open_connections": PoolKey.MAX_OPEN_CONNECTIONS,
        "min_idle_connections": PoolKey.MIN_IDLE_CONNECTIONS,
        "max_connection_lifetime": PoolKey.MAX_CONNECTION_LIFE_TIME,
        "max_connection_life_time": PoolKey.MAX_CONNECTION_LIFE_TIME,
    }
)


def lookup_key(name: str) -> PoolKey | None:
    """Map an already normalized field name to a recognized key."""

    try:
        return PoolKey(name)
    except ValueError:
        return KEY_ALIASES.get(name)
