from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Dict, Iterator, List, Optional

from lootr.drop_rules import SEPARATOR
from lootr.errors import ConfigError, NotFound


def split_path(path: Optional[str]) -> List[str]:
    """Split a drop path into branch names. Root is None, "" or "/"."""
    if not path:
        return []
    return [segment for segment in path.split(SEPARATOR) if segment]


class Item(BaseModel):
    name: str = Field(..., description="Name of the item")
    props: Dict[str, str] = Field(
        default_factory=dict,
        description="Item properties, keys are unique and unordered"
    )

    model_config = {"frozen": True}

    @classmethod
    def a(cls, name: str) -> "Item":
        return cls(name=name)

    @classmethod
    def an(cls, name: str) -> "Item":
        return cls(name=name)

    @classmethod
    def named(cls, name: str) -> "Item":
        return cls(name=name)

    @classmethod
    def from_props(cls, name: str, props: Dict[str, str]) -> "Item":
        return cls(name=name, props=dict(props))

    def has_prop(self, key: str) -> bool:
        return key in self.props

    def get_prop(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.props.get(key, default)

    def extend(self, name: str, props: Dict[str, str]) -> "Item":
        """
        Return a new item with the given name, this item's props and the
        given props. Given props override existing ones.
        """
        return Item(name=name, props={**self.props, **props})

    def with_prop(self, key: str, value: str) -> "Item":
        return self.extend(self.name, {key: value})

    def without_props(self, *keys: str) -> "Item":
        return Item(
            name=self.name,
            props={k: v for k, v in self.props.items() if k not in keys},
        )

    def copy_for_drop(self) -> "Item":
        return self.model_copy(deep=True)

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.props.items())))

    def __str__(self) -> str:
        props = ",".join(f"{k}={v}" for k, v in self.props.items())
        return f"{self.name}{{{props}}}"


class LootNode(BaseModel):
    items: List[Item] = Field(
        default_factory=list,
        description="Items held at this level"
    )
    branches: Dict[str, "LootNode"] = Field(
        default_factory=dict,
        description="Named sub branches"
    )

    # -----------------------------
    # AUTHORING
    # -----------------------------

    def add(self, item: Item) -> "LootNode":
        self.items.append(item)
        return self

    def add_in(self, item: Item, path: str) -> "LootNode":
        self.branch(path).add(item)
        return self

    def add_branch(self, name: str, node: Optional["LootNode"] = None) -> "LootNode":
        """Attach a branch under this node and return this node (the owner)."""
        if not name or SEPARATOR in name:
            raise ConfigError(f"Invalid branch name: '{name}'")
        if node is not None and node.contains_node(self):
            raise ConfigError(f"Branch '{name}' would contain its own owner")
        self.branches[name] = node if node is not None else LootNode()
        return self

    # -----------------------------
    # LOOKUP
    # -----------------------------

    def branch(self, path: Optional[str]) -> "LootNode":
        node = self
        for segment in split_path(path):
            child = node.branches.get(segment)
            if child is None:
                raise NotFound(path, segment)
            node = child
        return node

    def contains_node(self, node: "LootNode") -> bool:
        """True if `node` is this node or any node below it."""
        if node is self:
            return True
        return any(branch.contains_node(node) for branch in self.branches.values())

    def self_count(self) -> int:
        return len(self.items)

    def all_items(self) -> List[Item]:
        return list(self.iter_items())

    def iter_items(self) -> Iterator[Item]:
        yield from self.items
        for branch in self.branches.values():
            yield from branch.iter_items()

    def all_count(self) -> int:
        return len(self.all_items())

    # -----------------------------
    # DISPLAY
    # -----------------------------

    def render(self, name: str = "ROOT") -> str:
        return "\n".join(self._render_lines(name, ""))

    def _render_lines(self, name: str, indent: str) -> List[str]:
        lines = [f"{indent}{name}"]
        child_indent = indent + "    "
        for item in self.items:
            lines.append(f"{child_indent}- {item.name}")
        for branch_name, branch in self.branches.items():
            lines.extend(branch._render_lines(f"@{branch_name}", child_indent))
        return lines
