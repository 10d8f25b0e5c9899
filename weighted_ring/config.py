from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .hashing import BUCKET_COUNT, POINT_SPACE, POINTS_PER_WEIGHT, is_power_of_two


class Settings(BaseSettings):
    """Runtime configuration for consistent hashing rings."""

    model_config = SettingsConfigDict(env_prefix="WEIGHTED_RING_")

    points_per_weight: int = Field(default=POINTS_PER_WEIGHT, gt=0)
    bucket_count: int = Field(default=BUCKET_COUNT, gt=0, le=POINT_SPACE)

    @field_validator("bucket_count")
    @classmethod
    def _bucket_count_divides_keyspace(cls, value: int) -> int:
        if not is_power_of_two(value):
            raise ValueError("bucket_count must be a power of two")
        return value


settings = Settings()
