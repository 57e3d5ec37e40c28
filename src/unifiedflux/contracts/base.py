from pydantic import BaseModel, ConfigDict


class FluxBaseModel(BaseModel):
    """Immutable base for messages; the concrete class is the dispatch key.

    Unknown fields are rejected so a misspelled field fails at construction
    rather than reaching a handler.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
