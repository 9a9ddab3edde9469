from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from tasktrack.web.deps import AUTH_COOKIE_NAME

# Operations reachable without a session
PUBLIC_ENDPOINTS = {
    ("POST", "/api/v1/auth/signup"),
    ("POST", "/api/v1/auth/login"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="TaskTrack API",
            version="0.1.0",
            summary="Multi-tenant project and task tracking",
            routes=app.routes,
        )

        components = openapi_schema.setdefault("components", {})
        components["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Bearer token authentication (preferred)",
            },
            "AuthTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": AUTH_COOKIE_NAME,
                "description": "Authentication token stored in cookie",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"AuthTokenCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class IssueResponse(BaseModel):
    """One rejected field."""

    path: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Human-readable reason")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    issues: list[IssueResponse] | None = Field(None, description="Per-field problems for validation errors")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid or expired session", "type": "authentication_error"},
                {"message": "Email already registered", "type": "conflict"},
                {
                    "message": "Validation failed",
                    "type": "validation_error",
                    "issues": [{"path": "name", "message": "Name is required"}],
                },
            ]
        }
    }
