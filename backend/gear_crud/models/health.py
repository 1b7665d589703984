"""
Gear CRUD — Health Check Response Model
========================================

What:  Body returned by GET /health when the database probe fails.
Who:   Built by routes/health.py, read by monitoring and load balancer probes.
"""

from pydantic import BaseModel, ConfigDict, Field


class HealthCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(alias="apiVersion", description="Running API version")
    db_error: str = Field(default="", alias="dbError", description="Database probe failure")
