"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.
    
    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class FrozenSchema(BaseModel):
    """
    Base for immutable values.
    
    Used for view-state and snapshot values that are replaced,
    never mutated. Derive a changed copy with model_copy(update=...).
    Text is kept exactly as delivered so IDs match their source keys.
    """
    model_config = ConfigDict(
        from_attributes=True,
        frozen=True
    )
