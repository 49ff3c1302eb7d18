from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from typing import Any, Optional

from lootr.drop_rules import (
    ANY_DEPTH,
    DEFAULT_DEPTH,
    DEFAULT_LUCK,
    DEFAULT_STACK,
    ROOT,
)
from lootr.errors import ConfigError


class ConfigModel(BaseModel):
    """Base model reporting invalid values as ConfigError at construction."""

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid {type(self).__name__}: {e}") from e


# -----------------------------
# STACK RANGE
# -----------------------------

class StackRange(ConfigModel):
    min: int = Field(
        default=DEFAULT_STACK[0],
        ge=0,
        description="Smallest number of items a drop yields"
    )
    max: int = Field(
        default=DEFAULT_STACK[1],
        ge=0,
        description="Largest number of items a drop yields (inclusive)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def from_shorthand(cls, value):
        # 3 -> 3..=3, (1, 3) -> 1..=3, range(1, 4) -> 1..=3
        if isinstance(value, int) and not isinstance(value, bool):
            return {"min": value, "max": value}
        if isinstance(value, range):
            if value.step != 1 or len(value) == 0:
                raise ValueError("stack range must be non-empty with a step of 1")
            return {"min": value.start, "max": value.stop - 1}
        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise ValueError("stack must be given as (min, max)")
            return {"min": value[0], "max": value[1]}
        return value

    @model_validator(mode="after")
    def ordered(self):
        if self.min > self.max:
            raise ValueError(f"stack min ({self.min}) is greater than max ({self.max})")
        return self

    def __str__(self) -> str:
        return f"{self.min}..={self.max}"


# -----------------------------
# DROP SPEC
# -----------------------------

class DropSpec(ConfigModel):
    path: str = Field(
        default=ROOT,
        description="Branch path to drop from. Empty string is the root."
    )
    depth: int = Field(
        default=DEFAULT_DEPTH,
        ge=0,
        description="How many branch levels a pick may descend. 0 = only this node."
    )
    luck: float = Field(
        default=DEFAULT_LUCK,
        ge=0.0,
        le=1.0,
        description="Chance the drop succeeds. Decays at each visited branch."
    )
    stack: StackRange = Field(
        default_factory=StackRange,
        description="Inclusive range of items yielded by this drop"
    )
    modify: bool = Field(
        default=False,
        description="If true, dropped items go through the modifier pipeline"
    )

    model_config = {"frozen": True}

    @field_validator("path", mode="before")
    @classmethod
    def root_if_missing(cls, v):
        if v is None:
            return ROOT
        return v

    @field_validator("depth", "luck", mode="before")
    @classmethod
    def not_a_flag(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number, not a bool")
        return v


# -----------------------------
# DROP BUILDER
# -----------------------------

class DropBuilder:
    """
    Fluent factory for DropSpec.

        DropBuilder().path("weapons").depth(2).luck(0.5).stack(1, 3).build()

    Values are only checked by build(), which raises ConfigError.
    """

    def __init__(self):
        self._values = {}

    def path(self, path: Optional[str]) -> "DropBuilder":
        self._values["path"] = path
        return self

    def depth(self, depth: int) -> "DropBuilder":
        self._values["depth"] = depth
        return self

    def anydepth(self) -> "DropBuilder":
        self._values["depth"] = ANY_DEPTH
        return self

    def luck(self, luck: float) -> "DropBuilder":
        self._values["luck"] = luck
        return self

    def stack(self, low, high: Optional[int] = None) -> "DropBuilder":
        if high is None:
            self._values["stack"] = low
        else:
            self._values["stack"] = (low, high)
        return self

    def modify(self, flag: bool = True) -> "DropBuilder":
        self._values["modify"] = flag
        return self

    def build(self) -> DropSpec:
        return DropSpec(**self._values)
