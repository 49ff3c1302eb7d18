import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from lootr.drop_rules import ANY_DEPTH, DECAY_FACTOR, ROOT
from lootr.errors import ConfigError, NotFound
from lootr.models.loot_models import Item, LootNode
from lootr.modifiers import Modifier, ModifierPipeline
from lootr.rng import RandomSource, get_rng
from lootr.schemas import DropSpec

logger = logging.getLogger(__name__)

# A pick chooses uniformly among the items and the branches of a node
Candidate = Union[Item, LootNode]

Modifiers = Union[ModifierPipeline, Iterable[Modifier], None]


def resolve_path(tree: LootNode, path: Optional[str]) -> LootNode:
    return tree.branch(path)


def build_candidates(node: LootNode, remaining_depth: int) -> List[Candidate]:
    candidates: List[Candidate] = list(node.items)
    if remaining_depth > 0:
        candidates.extend(node.branches.values())
    return candidates


def lucky(rng: RandomSource, luck: float) -> bool:
    # luck 0.0 never passes, luck 1.0 always does
    return rng.random() < luck


def pick(node: LootNode, depth: int, luck: float, rng: RandomSource) -> Optional[Item]:
    """
    Walk down from `node` until an item is chosen.

    At every level one candidate is drawn among the node items and, while
    depth remains, its branches. Choosing a branch halves the luck and rolls
    it again before descending, so deep items get rarer at each level.
    Returns a copy of the chosen item, or None when the walk finds nothing.
    """
    remaining_depth = depth
    current_luck = luck

    while True:
        candidates = build_candidates(node, remaining_depth)
        if not candidates:
            return None

        chosen = candidates[rng.randint(0, len(candidates) - 1)]
        if isinstance(chosen, Item):
            return chosen.copy_for_drop()

        current_luck *= DECAY_FACTOR
        if not lucky(rng, current_luck):
            return None

        node = chosen
        remaining_depth -= 1


def attempt(node: LootNode, depth: int, luck: float, rng: RandomSource) -> Optional[Item]:
    """Luck gate, then a pick."""
    if not lucky(rng, luck):
        return None
    return pick(node, depth, luck, rng)


def roll(
    tree: LootNode,
    path: Optional[str] = ROOT,
    depth: int = 0,
    luck: float = 1.0,
    rng: Optional[RandomSource] = None,
) -> Optional[Item]:
    """Pick a single item from the given branch, or None."""
    drop = DropSpec(path=path, depth=depth, luck=luck)
    if rng is None:
        rng = get_rng()

    try:
        node = resolve_path(tree, drop.path)
    except NotFound as e:
        logger.debug("Roll missed: %s", e)
        return None

    return attempt(node, drop.depth, drop.luck, rng)


def roll_any(tree: LootNode, rng: Optional[RandomSource] = None) -> Optional[Item]:
    """Pick a single item anywhere in the tree."""
    return roll(tree, ROOT, ANY_DEPTH, 1.0, rng)


def drop_items(
    tree: LootNode,
    drop: DropSpec,
    rng: RandomSource,
    modifiers: Optional[ModifierPipeline] = None,
) -> List[Item]:
    """Items yielded by a single drop spec, in draw order."""
    try:
        node = resolve_path(tree, drop.path)
    except NotFound as e:
        logger.debug("Drop missed: %s", e)
        return []

    first = attempt(node, drop.depth, drop.luck, rng)
    if first is None:
        logger.debug("Drop missed at '%s' (luck=%s, depth=%s)", drop.path, drop.luck, drop.depth)
        return []

    stack = rng.randint(drop.stack.min, drop.stack.max)
    units = [first] if stack > 0 else []

    # every further unit of the stack is an independent draw and may miss
    for _ in range(stack - 1):
        unit = attempt(node, drop.depth, drop.luck, rng)
        if unit is not None:
            units.append(unit)

    if drop.modify and modifiers is not None:
        units = [modifiers.apply(unit) for unit in units]

    return units


def loot_seeded(
    tree: LootNode,
    drops: Iterable[Union[DropSpec, Mapping[str, Any]]],
    rng: RandomSource,
    modifiers: Modifiers = None,
) -> List[Item]:
    """
    Roll against a looting table with the given random source.

    Drops are resolved in order and their items appended one after the other.
    A drop whose path is not in the tree yields nothing.
    """
    if not isinstance(rng, RandomSource):
        raise ConfigError(f"rng must provide random() and randint(), got {type(rng).__name__}")

    pipeline = as_pipeline(modifiers)
    specs = [as_drop(d) for d in drops]

    rewards: List[Item] = []
    for drop in specs:
        rewards.extend(drop_items(tree, drop, rng, pipeline))

    logger.debug("Resolved %d drops into %d items", len(specs), len(rewards))
    return rewards


def loot(
    tree: LootNode,
    drops: Iterable[Union[DropSpec, Mapping[str, Any]]],
    modifiers: Modifiers = None,
) -> List[Item]:
    """Roll against a looting table with a fresh non deterministic source."""
    return loot_seeded(tree, drops, get_rng(), modifiers)


def as_drop(drop: Union[DropSpec, Mapping[str, Any]]) -> DropSpec:
    if isinstance(drop, DropSpec):
        return drop
    if isinstance(drop, Mapping):
        return DropSpec(**drop)
    raise ConfigError(f"Expected a DropSpec, got {type(drop).__name__}")


def as_pipeline(modifiers: Modifiers) -> Optional[ModifierPipeline]:
    if modifiers is None or isinstance(modifiers, ModifierPipeline):
        return modifiers
    return ModifierPipeline(modifiers)
