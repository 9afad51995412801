"""Base model for thread entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity base.

    Entities are never changed in place. Updates produce copies with
    ``model_copy(update=...)``, so successive versions of a comment tree
    share every subtree that did not change.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
