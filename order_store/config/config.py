"""
Order store configuration.

Every setting can come from the environment (or a ``.env`` file):

    AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY   credentials, optional
    AWS_REGION                                  defaults to us-east-1
    DYNAMODB_ENDPOINT_URL                       e.g. DynamoDB Local
    DYNAMODB_TABLE_NAME                         base table name, defaults to "orders"
    DYNAMODB_TABLE_PREFIX                       prepended to the table name
    ENVIRONMENT                                 dev | staging | test | prod
    DYNAMODB_DEBUG_LOGGING                      "true" to log at DEBUG
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

ENVIRONMENTS = ('dev', 'staging', 'test', 'prod')


def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name, default)


def _env_flag(name: str):
    return lambda: os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


class DynamoDBConfig(BaseModel):
    """Connection and table settings for the single order-store table."""

    model_config = ConfigDict(validate_assignment=True)

    # Credentials and endpoint
    aws_access_key_id: Optional[str] = Field(default_factory=_env("AWS_ACCESS_KEY_ID"))
    aws_secret_access_key: Optional[str] = Field(default_factory=_env("AWS_SECRET_ACCESS_KEY"))
    region_name: str = Field(default_factory=_env("AWS_REGION", "us-east-1"))
    endpoint_url: Optional[str] = Field(
        default_factory=_env("DYNAMODB_ENDPOINT_URL"),
        description="Override for DynamoDB Local or LocalStack"
    )

    # Table layout
    table_name: str = Field(
        default_factory=_env("DYNAMODB_TABLE_NAME", "orders"),
        description="Base name of the table holding every entity type"
    )
    table_prefix: str = Field(default_factory=_env("DYNAMODB_TABLE_PREFIX", ""))
    gsi1_name: str = Field(default="gsi1", description="Index over gsi1_pk / gsi1_sk")
    gsi2_name: str = Field(default="gsi2", description="Index over gsi2_pk / gsi2_sk")

    # botocore client tuning
    max_pool_connections: int = Field(default=50, ge=1, description="Also bounds truncate() concurrency")
    retries: int = Field(default=3, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Runtime
    environment: str = Field(default_factory=_env("ENVIRONMENT", "dev"))
    enable_debug_logging: bool = Field(default_factory=_env_flag("DYNAMODB_DEBUG_LOGGING"))

    @field_validator('region_name', 'table_name')
    @classmethod
    def require_value(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {', '.join(ENVIRONMENTS)}, got {v!r}")
        return v

    def get_table_name(self, base_name: Optional[str] = None) -> str:
        """Physical table name: ``[prefix_][environment_]name``.

        The environment segment is left out in prod so production tables
        keep their plain names.

        Example:
            DynamoDBConfig(table_prefix="acme", environment="dev").get_table_name()
            -> "acme_dev_orders"
        """
        segments = [
            self.table_prefix,
            None if self.environment == "prod" else self.environment,
            base_name or self.table_name,
        ]
        return "_".join(segment for segment in segments if segment)

    def index_name(self, index: int) -> str:
        """Name of GSI number ``index`` (1 or 2)."""
        names = {1: self.gsi1_name, 2: self.gsi2_name}
        if index not in names:
            raise ValueError(f"Unknown index number {index}, expected 1 or 2")
        return names[index]

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Build a configuration purely from environment variables."""
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8000") -> 'DynamoDBConfig':
        """Configuration for DynamoDB Local with dummy credentials and debug logging."""
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            environment="dev",
            enable_debug_logging=True
        )
