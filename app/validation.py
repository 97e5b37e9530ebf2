"""
Field-constraint checking for entities about to be persisted.

The constraints themselves live on the entity models in ``app.models``; the
validator re-runs them over an entity's current values (entities are built
and mutated without validation) and reports every violation at once.
"""

from typing import NamedTuple

from pydantic import BaseModel, ValidationError

from app.exceptions import ValidationFailedError


class Violation(NamedTuple):
    field: str
    message: str


class EntityValidator:
    """Stateless; build one and hand it to the operations that persist entities."""

    def validate(self, entity: BaseModel) -> list[Violation]:
        try:
            type(entity).model_validate(dict(entity))
        except ValidationError as exc:
            return [
                Violation(
                    field=".".join(str(part) for part in err["loc"]),
                    message=err["msg"],
                )
                for err in exc.errors()
            ]
        return []

    def check(self, entity: BaseModel) -> None:
        violations = self.validate(entity)
        if violations:
            raise ValidationFailedError(type(entity).__name__.lower(), violations)
