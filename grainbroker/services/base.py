"""Generic CRUD service shared by customers, suppliers and orders.

Every entity service exposes the same six operations:

    list()            all rows, store order
    get_by_id(id)     row or None
    exists(id)        bool
    create(entity)    validate, insert, return the persisted entity
    update(id, e)     validate, full-row replace, return an UpdateOutcome
    delete(id)        True if a row was removed

Subclasses only declare `model`, `entity_name` and `rules`.

Conflict policy for update():
  - save() raises ConcurrencyError when the UPDATE matched no row
  - the row is gone       -> UpdateOutcome.NOT_FOUND
  - the row still exists  -> the ConcurrencyError propagates
"""

import enum
import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from grainbroker.database import Base
from grainbroker.middleware.exceptions import ValidationError
from grainbroker.persistence import ConcurrencyError, GrainBrokerContext

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class UpdateOutcome(str, enum.Enum):
    UPDATED = "updated"
    ID_MISMATCH = "id_mismatch"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ValidationRule:
    """A field rule: `check(entity)` must be truthy, otherwise `message` is reported."""
    field: str
    check: Callable[[Any], bool]
    message: str


class EntityService(Generic[ModelT]):
    model: ClassVar[type[Base]]
    entity_name: ClassVar[str]
    rules: ClassVar[tuple[ValidationRule, ...]] = ()

    def __init__(self, context: GrainBrokerContext):
        self.context = context

    # ── Queries ─────────────────────────────────────────────────

    async def list(self) -> Sequence[ModelT]:
        return await self.context.all(self.model)

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelT | None:
        return await self.context.find(self.model, entity_id)

    async def exists(self, entity_id: uuid.UUID) -> bool:
        return await self.context.any(self.model, entity_id)

    # ── Validation ──────────────────────────────────────────────

    def validate(self, entity: ModelT | None) -> None:
        """Check `entity` against every rule, stopping at the first failure.

        Raises:
            ValidationError: entity is None or a rule failed.
        """
        if entity is None:
            raise ValidationError(f"{self.entity_name} is required")

        for rule in self.rules:
            if not rule.check(entity):
                raise ValidationError(rule.message)

    # ── Commands ────────────────────────────────────────────────

    async def create(self, entity: ModelT | None) -> ModelT:
        self.validate(entity)

        self.context.add(entity)
        await self.context.save()

        logger.info(f"Created {self.entity_name} {entity.id}")
        return entity

    async def update(self, entity_id: uuid.UUID, entity: ModelT | None) -> UpdateOutcome:
        if entity is None:
            raise ValidationError(f"{self.entity_name} is required")

        if entity.id != entity_id:
            return UpdateOutcome.ID_MISMATCH

        self.validate(entity)

        self.context.mark_modified(entity)
        try:
            await self.context.save()
        except ConcurrencyError:
            if not await self.exists(entity_id):
                logger.info(f"{self.entity_name} {entity_id} vanished before update")
                return UpdateOutcome.NOT_FOUND
            logger.warning(f"{self.entity_name} {entity_id} still exists after a concurrency conflict")
            raise

        logger.info(f"Updated {self.entity_name} {entity_id}")
        return UpdateOutcome.UPDATED

    async def delete(self, entity_id: uuid.UUID) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False

        await self.context.remove(entity)
        await self.context.save()

        logger.info(f"Deleted {self.entity_name} {entity_id}")
        return True
