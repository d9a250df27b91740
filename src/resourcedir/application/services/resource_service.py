from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resourcedir.core.errors import PersistenceError, ValidationError
from resourcedir.core.ids import new_uuid
from resourcedir.core.time import now_utc_iso
from resourcedir.domain.models.resource import StoredResource
from resourcedir.infrastructure.db.repos.resource_repo import ResourceRepo

logger = logging.getLogger(__name__)

CREATE_OK_MESSAGE = "Data added successfully!"
CREATE_FAILED_MESSAGE = "Failed to add data."
MISSING_FIELDS_MESSAGE = "Please fill in all fields before submitting."
LIST_OK_MESSAGE = "Resources loaded."
LIST_FAILED_MESSAGE = "Failed to load resources."


@dataclass(slots=True)
class SubmitResult:
    success: bool
    message: str
    resource: StoredResource | None = None


@dataclass(slots=True)
class ListResult:
    success: bool
    message: str
    records: list[StoredResource] = field(default_factory=list)


def validate_submission(title: str, description: str, link: str) -> tuple[str, str, str]:
    values = [str(v or "").strip() for v in (title, description, link)]
    if not all(values):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    return values[0], values[1], values[2]


class ResourceService:
    """Persistence contract: create and list stored resources.

    Failures never raise to the caller; they come back as ``success=False``
    with a message fit for a user notification.
    """

    def __init__(self, resource_repo: ResourceRepo) -> None:
        self.resource_repo = resource_repo

    def create(self, title: str, description: str, link: str) -> SubmitResult:
        try:
            clean_title, clean_description, clean_link = validate_submission(title, description, link)
        except ValidationError as exc:
            return SubmitResult(success=False, message=str(exc))

        resource = StoredResource(
            id=new_uuid(),
            title=clean_title,
            description=clean_description,
            link=clean_link,
            created_at=now_utc_iso(),
        )
        try:
            self.resource_repo.insert(resource)
        except PersistenceError as exc:
            logger.error("Database error while adding resource: %s", exc)
            return SubmitResult(success=False, message=CREATE_FAILED_MESSAGE)

        logger.info("Stored resource %s (%s)", resource.id, resource.link)
        return SubmitResult(success=True, message=CREATE_OK_MESSAGE, resource=resource)

    def list_all(self) -> ListResult:
        try:
            records = self.resource_repo.list_all()
        except PersistenceError as exc:
            logger.error("Database error while fetching resources: %s", exc)
            return ListResult(success=False, message=LIST_FAILED_MESSAGE)
        return ListResult(success=True, message=LIST_OK_MESSAGE, records=records)
