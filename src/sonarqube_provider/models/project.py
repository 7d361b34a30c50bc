"""Project payloads of the SonarQube web API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RemoteProject(BaseModel):
    """A project as the server reports it."""

    key: str
    name: str
    visibility: str | None = None


class CreateProjectResponse(BaseModel):
    """Body of ``POST api/projects/create``."""

    project: RemoteProject


class SearchProjectsResponse(BaseModel):
    """Body of ``GET api/projects/search``.

    Only ``components`` is used; ``paging`` and other keys are ignored.
    """

    components: list[RemoteProject] = Field(default_factory=list)
