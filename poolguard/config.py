from __future__ import annotations

import os
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw: str = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class RuleConfig(BaseModel):
    """Settings describing which constructor is checked and where its pool argument sits.

    Defaults match the database client signature
    ``Client(url, user, password, options, connectionPool)`` and can be
    overridden through ``POOLGUARD_*`` environment variables.
    """

    model_config = ConfigDict(frozen=True)

    target_constructors: tuple[str, ...] = Field(
        default=_env_list("POOLGUARD_TARGETS", "jdbc.Client"),
        description="Fully qualified names of the client classes to check",
    )
    pool_param_names: tuple[str, ...] = Field(
        default=_env_list("POOLGUARD_POOL_PARAMS", "connectionPool,connection_pool"),
        description="Accepted names of the connection pool parameter",
    )
    total_param_count: int = Field(
        default=int(os.getenv("POOLGUARD_PARAM_COUNT", "5")), ge=1
    )
    config_param_index: int = Field(
        default=int(os.getenv("POOLGUARD_POOL_INDEX", "4")), ge=0
    )

    @model_validator(mode="after")
    def validate_param_index(self) -> Self:
        """Ensure the pool parameter index falls inside the parameter list."""

        if self.config_param_index >= self.total_param_count:
            raise ValueError("config_param_index must be lower than total_param_count")
        return self
