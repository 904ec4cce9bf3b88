"""API server configuration models."""

from pydantic import BaseModel, Field


class APIConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="Bind port")
    diagnostic_routes: bool = Field(
        default=True,
        description="Expose /weatherforecast/error and /weatherforecast/logs/{level}",
    )
    docs_url: str = Field(default="/swagger", description="Swagger UI path (development only)")
    openapi_url: str = Field(
        default="/swagger/v1/swagger.json",
        description="OpenAPI document path (development only)",
    )
