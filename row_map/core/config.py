"""Mapper configuration.

MapperConfig is a Pydantic model so settings can be loaded from any
dict-like source and validated once.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from row_map.core.enums import RowVersion


class MapperConfig(BaseModel):
    """Configuration for a Mapper.

    Attributes:
        default_version: Row version read by row-set operations when the
            caller passes none. ``None`` reads the default version and skips
            deleted rows.
        duplicate_keys: ``"error"`` raises DuplicateKeyError when a
            dictionary mapping meets a key twice; ``"replace"`` keeps the
            last object.
        infer_columns: Add columns to a target row-set that has none,
            derived from the first source.
    """

    model_config = ConfigDict(frozen=True)

    default_version: RowVersion | None = None
    duplicate_keys: Literal["error", "replace"] = "error"
    infer_columns: bool = True
