"""Pydantic data models for the SonarQube web API."""

from sonarqube_provider.models.project import (
    CreateProjectResponse,
    RemoteProject,
    SearchProjectsResponse,
)

__all__ = [
    "CreateProjectResponse",
    "RemoteProject",
    "SearchProjectsResponse",
]
