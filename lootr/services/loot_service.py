import logging
from collections import Counter
from typing import Dict, Optional, Sequence

from lootr.drop_engine import Modifiers, as_drop, as_pipeline, loot_seeded
from lootr.drop_rules import MAX_SIMULATIONS
from lootr.errors import ConfigError
from lootr.models.loot_models import LootNode
from lootr.rng import EntropyRandom, Seed, get_rng
from lootr.schemas import DropSpec

logger = logging.getLogger(__name__)


def _check_simulations(simulations: int):
    if not 1 <= simulations <= MAX_SIMULATIONS:
        raise ConfigError(f"simulations must be between 1 and {MAX_SIMULATIONS}, got {simulations}")


def simulate_drops(
    tree: LootNode,
    drops: Sequence[DropSpec],
    simulations: int,
    seed: Optional[Seed] = None,
    modifiers: Modifiers = None,
) -> Counter:
    """Run the drops `simulations` times and count the dropped item names."""
    _check_simulations(simulations)
    rng = get_rng(seed)
    specs = [as_drop(d) for d in drops]
    pipeline = as_pipeline(modifiers)

    counts: Counter = Counter()
    for _ in range(simulations):
        counts.update(item.name for item in loot_seeded(tree, specs, rng, pipeline))

    logger.info(
        "Simulated %d rolls of %d drops: %d items",
        simulations, len(specs), sum(counts.values()),
    )
    return counts


def drop_distribution(counts: Dict[str, int], simulations: int) -> Dict[str, float]:
    """Items dropped per 100 rolls, by name."""
    _check_simulations(simulations)
    return {
        name: round((count / simulations) * 100, 2)
        for name, count in sorted(counts.items(), key=lambda x: x[1], reverse=True)
    }


def compare_drops(
    tree: LootNode,
    base: Sequence[DropSpec],
    other: Sequence[DropSpec],
    simulations: int,
    seed: Optional[Seed] = None,
) -> Dict[str, Dict[str, float]]:
    """Compare two drop lists on the same tree, with identically seeded sources."""
    if seed is None:
        seed = EntropyRandom().randint(0, 2**63)

    base_dist = drop_distribution(simulate_drops(tree, base, simulations, seed), simulations)
    other_dist = drop_distribution(simulate_drops(tree, other, simulations, seed), simulations)

    delta = {
        name: round(other_dist.get(name, 0) - base_dist.get(name, 0), 2)
        for name in sorted(set(base_dist) | set(other_dist))
    }

    return {
        "base": base_dist,
        "other": other_dist,
        "delta": delta,
    }
