"""The ``sonarqube_project`` resource.

Maps a project's declarative configuration onto the server's
``api/projects`` endpoints. There is no update: every field is
force-new, so any change is a destroy followed by a create.
"""

from __future__ import annotations

import logging

from sonarqube_provider.client.errors import (
    DecodeError,
    NotFoundError,
    RemoteError,
    TransportError,
)
from sonarqube_provider.client.server import SonarQubeClient
from sonarqube_provider.models.project import (
    CreateProjectResponse,
    SearchProjectsResponse,
)
from sonarqube_provider.resources.schema import FieldSchema, ResourceSchema
from sonarqube_provider.resources.state import ResourceState

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "sonarqube_project"

VISIBILITIES = ("public", "private")

PROJECT_SCHEMA = ResourceSchema(
    type_name=RESOURCE_TYPE,
    fields=(
        FieldSchema(
            name="name",
            required=True,
            force_new=True,
            description="Display name of the project",
        ),
        FieldSchema(
            name="project",
            required=True,
            force_new=True,
            description="Project key on the server",
        ),
        FieldSchema(
            name="visibility",
            default="public",
            force_new=True,
            choices=VISIBILITIES,
            description="public or private",
        ),
    ),
)

CREATE_PATH = "api/projects/create"
SEARCH_PATH = "api/projects/search"
DELETE_PATH = "api/projects/delete"


class ProjectResource:
    """Create, read, delete and import SonarQube projects."""

    schema = PROJECT_SCHEMA

    def __init__(self, client: SonarQubeClient) -> None:
        self.client = client

    def create(self, state: ResourceState) -> None:
        """Create the project and set ``state.id`` to the returned key."""
        params = {
            "name": state.name,
            "project": state.project,
            "visibility": state.visibility,
        }
        try:
            response = self.client.post(CREATE_PATH, params=params, expected_status=200)
            created = self.client.decode(response, CreateProjectResponse)
        except (TransportError, RemoteError, DecodeError) as exc:
            logger.error("create %s failed: %s", state.project, exc)
            raise
        state.set_id(created.project.key)
        logger.debug("created project %s", state.id)

    def read(self, state: ResourceState) -> None:
        """Refresh *state* from the server.

        A project that no longer exists clears ``state.id``.
        """
        try:
            response = self.client.get(
                SEARCH_PATH, params={"projects": state.id}, expected_status=200,
            )
            found = self.client.decode(response, SearchProjectsResponse)
        except (TransportError, RemoteError, DecodeError) as exc:
            logger.error("read %s failed: %s", state.id, exc)
            raise

        for component in found.components:
            if component.key == state.id:
                state.set_id(component.key)
                state.project = component.key
                state.name = component.name
                if component.visibility is not None:
                    state.visibility = component.visibility
                return

        logger.warning("project %s no longer exists, marking it absent", state.id)
        state.clear_id()

    def delete(self, state: ResourceState) -> None:
        try:
            self.client.post(
                DELETE_PATH, params={"projects": state.id}, expected_status=204,
            )
        except (TransportError, RemoteError) as exc:
            logger.error("delete %s failed: %s", state.id, exc)
            raise

    def import_state(self, identifier: str) -> list[ResourceState]:
        """Adopt an existing project by key.

        Returns a one-element list, the shape the lifecycle expects from an
        importer.
        """
        state = ResourceState(id=identifier)
        self.read(state)
        if not state.is_present:
            raise NotFoundError(404, f"Cannot import non-existent remote object: {identifier}")
        return [state]
