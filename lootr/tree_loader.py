import logging
from typing import Any, Dict

from lootr.errors import ConfigError
from lootr.models.loot_models import Item, LootNode
from lootr.tree_validator import validate_tree_dict

logger = logging.getLogger(__name__)


def build_tree(data: Dict[str, Any]) -> LootNode:
    """
    Build a loot tree from its nested dict form.

    The dict is validated first, the first error found is raised as a
    ConfigError. See validate_tree_dict() for the accepted format.
    """
    report = validate_tree_dict(data)
    if not report["valid"]:
        first = report["errors"][0]
        raise ConfigError(
            f"Invalid loot tree at {first['path']}: {first['message']} "
            f"({len(report['errors'])} error(s))"
        )

    tree = _build_node(data)
    logger.info(
        "Built loot tree with %d items in %d branches",
        report["summary"]["total_items"],
        report["summary"]["branches"],
    )
    return tree


def _build_node(data: Dict[str, Any]) -> LootNode:
    node = LootNode()

    for raw in data.get("items", []):
        if isinstance(raw, str):
            node.add(Item.named(raw))
        else:
            node.add(Item.from_props(raw["name"], raw.get("props", {})))

    for name, child in data.get("branches", {}).items():
        node.add_branch(name, _build_node(child))

    return node
