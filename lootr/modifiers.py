from pydantic import Field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from lootr.errors import ConfigError
from lootr.models.loot_models import Item
from lootr.schemas import ConfigModel


# -----------------------------
# MODIFIER BASE
# -----------------------------

class Modifier(ConfigModel):
    """
    Item -> Item transform applied to dropped items when a drop asks for it.

    Subclasses implement apply() and must return a new Item, never change the
    one they receive. Their fields are their whole state, so a pipeline can be
    dumped and compared.
    """

    model_config = {"frozen": True}

    def apply(self, item: Item) -> Item:
        raise NotImplementedError(f"{type(self).__name__} does not implement apply()")

    def __call__(self, item: Item) -> Item:
        return self.apply(item)


# -----------------------------
# BUILT-IN MODIFIERS
# -----------------------------

class SetProps(Modifier):
    props: Dict[str, str] = Field(
        description="Properties added to the item, replacing existing values"
    )

    def apply(self, item: Item) -> Item:
        return item.extend(item.name, self.props)


class RemoveProps(Modifier):
    keys: List[str] = Field(description="Property keys to drop")

    def apply(self, item: Item) -> Item:
        return item.without_props(*self.keys)


class Rename(Modifier):
    name: str = Field(min_length=1, description="New item name")

    def apply(self, item: Item) -> Item:
        return item.extend(self.name, {})


class Prefix(Modifier):
    prefix: str
    separator: str = " "

    def apply(self, item: Item) -> Item:
        return item.extend(f"{self.prefix}{self.separator}{item.name}", {})


class Suffix(Modifier):
    suffix: str
    separator: str = " "

    def apply(self, item: Item) -> Item:
        return item.extend(f"{item.name}{self.separator}{self.suffix}", {})


# -----------------------------
# PIPELINE
# -----------------------------

class ModifierPipeline:
    """Ordered modifiers. The output of one is the input of the next."""

    def __init__(self, modifiers: Optional[Iterable[Modifier]] = None):
        self._modifiers: List[Modifier] = []
        for modifier in modifiers or []:
            self.add(modifier)

    def add(self, modifier: Modifier) -> "ModifierPipeline":
        if not isinstance(modifier, Modifier):
            raise ConfigError(
                f"Modifiers must subclass Modifier, got {type(modifier).__name__}"
            )
        self._modifiers.append(modifier)
        return self

    def apply(self, item: Item) -> Item:
        for modifier in self._modifiers:
            item = modifier.apply(item)
        return item

    def describe(self) -> List[Dict[str, Any]]:
        return [
            {"modifier": type(m).__name__, **m.model_dump()}
            for m in self._modifiers
        ]

    def __len__(self) -> int:
        return len(self._modifiers)

    def __iter__(self) -> Iterator[Modifier]:
        return iter(self._modifiers)

    def __repr__(self) -> str:
        names = ", ".join(type(m).__name__ for m in self._modifiers)
        return f"ModifierPipeline([{names}])"
