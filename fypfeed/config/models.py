"""Configuration models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("fypfeed", description="Database name")
    user: str = Field("fypfeed_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class SupabaseConfig(BaseModel):
    """Supabase REST configuration."""

    url: Optional[str] = Field(None, description="Project URL, e.g. https://xyz.supabase.co")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    api_key_env: Optional[str] = Field("SUPABASE_KEY", description="Environment variable for API key")
    timeout: float = Field(10.0, description="Request timeout in seconds", gt=0)


class StoreConfig(BaseModel):
    """Content store selection."""

    backend: Literal["memory", "postgres", "supabase"] = Field(
        "memory", description="Content store backend"
    )
    fixture_path: Optional[str] = Field(
        None, description="YAML fixture loaded by the memory backend"
    )


class RankingConfig(BaseModel):
    """Ranking weights. The five weights must sum to 1.0."""

    relevance_weight: float = Field(0.35, ge=0.0, le=1.0)
    performance_weight: float = Field(0.25, ge=0.0, le=1.0)
    relationship_weight: float = Field(0.20, ge=0.0, le=1.0)
    freshness_weight: float = Field(0.10, ge=0.0, le=1.0)
    diversity_weight: float = Field(0.10, ge=0.0, le=1.0)
    recent_watch_window: int = Field(10, ge=1, le=50)

    @model_validator(mode="after")
    def validate_weights(self) -> "RankingConfig":
        """Validate that weights sum to 1.0, including defaulted ones."""
        total = sum(self.weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Weights must sum to 1.0, got {total:.3f}")
        return self

    @property
    def weights(self) -> dict:
        return {
            "relevance": self.relevance_weight,
            "performance": self.performance_weight,
            "relationship": self.relationship_weight,
            "freshness": self.freshness_weight,
            "diversity": self.diversity_weight,
        }


class SourcingConfig(BaseModel):
    """Per-source caps for preference and candidate queries."""

    behavior_limit: int = Field(50, description="Behavior rows read per request", ge=1, le=500)
    followed_limit: int = Field(10, description="Items from followed creators", ge=0, le=100)
    interest_limit: int = Field(15, description="Items matching interests", ge=0, le=100)
    trending_limit: int = Field(10, description="Trending items", ge=0, le=100)
    discovery_limit: int = Field(5, description="Newest items for discovery", ge=0, le=100)


class FeedConfig(BaseModel):
    """Feed selection defaults."""

    limit: int = Field(20, description="Default feed size", ge=1, le=100)
    max_per_creator: int = Field(2, description="Max items per creator", ge=1, le=20)


class ConfigModel(BaseModel):
    """Main configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    supabase: SupabaseConfig = Field(default_factory=SupabaseConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    sourcing: SourcingConfig = Field(default_factory=SourcingConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
