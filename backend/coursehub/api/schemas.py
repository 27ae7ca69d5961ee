from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for request/response bodies.

    Python side uses snake_case, the JSON side uses camelCase
    (first_name <-> firstName). populate_by_name lets ORM objects
    validate through their snake_case attribute names.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
