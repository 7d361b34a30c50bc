"""Plan and apply resource changes.

A plan compares desired configuration with the prior state and picks one
action. Applying it drives the resource's create/delete operations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sonarqube_provider.resources.project import ProjectResource
from sonarqube_provider.resources.schema import ResourceSchema
from sonarqube_provider.resources.state import ResourceState

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE = "create"
    REPLACE = "replace"
    DELETE = "delete"
    NOOP = "noop"


@dataclass
class PlannedChange:
    action: Action
    prior: ResourceState | None = None
    desired: dict[str, Any] | None = None
    replace_fields: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return self.action is not Action.NOOP

def plan(
    schema: ResourceSchema,
    desired: Mapping[str, Any] | None,
    prior: ResourceState | None,
) -> PlannedChange:
    """Decide what it takes to move from *prior* to *desired*.

    ``desired=None`` means the resource should not exist.
    """
    config: dict[str, Any] | None = None
    if desired is not None:
        config = schema.apply_defaults(desired)
        schema.validate_config(config)

    if prior is None or not prior.is_present:
        if config is None:
            return PlannedChange(Action.NOOP, prior=prior)
        return PlannedChange(Action.CREATE, prior=prior, desired=config)

    if config is None:
        return PlannedChange(Action.DELETE, prior=prior)
    changed = schema.replacement_fields(prior.attributes(), config)
    if changed:
        return PlannedChange(
            Action.REPLACE, prior=prior, desired=config, replace_fields=changed,
        )
    return PlannedChange(Action.NOOP, prior=prior, desired=config)


def apply(
    resource: ProjectResource,
    change: PlannedChange,
    on_delete: Callable[[], None] | None = None,
) -> ResourceState | None:
    """Execute *change*; returns the new state, or None once deleted.

    *on_delete* runs as soon as the old project is gone, before a
    replacement is created, so callers can drop the stale record even if
    the create then fails.
    """
    prior, desired = change.prior, change.desired
    if change.action is Action.NOOP:
        return prior if prior is not None and prior.is_present else None

    if change.action in (Action.DELETE, Action.REPLACE):
        if prior is None:
            raise ValueError(f"Cannot {change.action.value} without a prior state")
        logger.info("destroying %s", prior.id)
        resource.delete(prior)
        if on_delete is not None:
            on_delete()
        if change.action is Action.DELETE:
            return None

    if desired is None:
        raise ValueError(f"Cannot {change.action.value} without a desired configuration")
    state = ResourceState.from_config(desired)
    logger.info("creating %s", state.project)
    resource.create(state)
    return state


def refresh(resource: ProjectResource, state: ResourceState) -> ResourceState | None:
    """Read *state* from the server; None when the project is gone."""
    resource.read(state)
    if not state.is_present:
        return None
    return state
