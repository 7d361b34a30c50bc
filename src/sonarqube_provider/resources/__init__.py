"""Provider resources and their lifecycle."""

from sonarqube_provider.resources.project import PROJECT_SCHEMA, ProjectResource
from sonarqube_provider.resources.schema import FieldSchema, ResourceSchema
from sonarqube_provider.resources.state import ResourceState

__all__ = [
    "PROJECT_SCHEMA",
    "FieldSchema",
    "ProjectResource",
    "ResourceSchema",
    "ResourceState",
]
