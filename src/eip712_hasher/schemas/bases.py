"""
Base Schema Models

Shared pydantic base for the input document and result models.

Dependencies:
    - pydantic: For data validation and serialization
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class CanonicalModel(BaseModel):
    """
    Pydantic base model with alias-aware dictionary output.

    Fields may be populated either by their Python name or by their wire
    alias (``primary_type`` / ``primaryType``); ``to_dict`` always emits the
    wire alias so the result can be handed to external EIP-712 tooling.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Returns:
            Dict[str, Any]: Dictionary keyed by field aliases.
        """
        return self.model_dump(by_alias=True)
