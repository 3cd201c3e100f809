import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_CLUSTER = "temforce-cluster"
DEFAULT_REGION = "us-west-2"


def _int_setting(
    env: Mapping[str, str], key: str, default: int, maximum: int = None
) -> int:
    raw = env.get(key, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{key} must be at least 1, got {value}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{key} must be at most {maximum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    cluster: str = DEFAULT_CLUSTER
    region: str = DEFAULT_REGION
    page_size: int = 10
    max_workers: int = 1
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Mapping[str, str] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            cluster=env.get("ECS_INVENTORY_CLUSTER", DEFAULT_CLUSTER),
            region=env.get("ECS_INVENTORY_REGION", DEFAULT_REGION),
            page_size=_int_setting(env, "ECS_INVENTORY_PAGE_SIZE", 10, maximum=10),
            max_workers=_int_setting(env, "ECS_INVENTORY_MAX_WORKERS", 1),
            log_level=env.get("ECS_INVENTORY_LOG_LEVEL", "WARNING").upper(),
        )
