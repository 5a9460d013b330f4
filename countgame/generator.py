from gymnasium.utils import seeding

from .config import Config
from .models import Item, ItemType, SIMILAR_ITEM_TYPES


class ItemGenerator:
    """Populates a stage with randomly placed, randomly moving items.

    All randomness comes from ``rng`` (a ``numpy.random.Generator``), so a
    fixed seed reproduces the exact layout.
    """

    ROTATION_RANGE = (0.0, 360.0)
    SCALE_RANGE = (1.0, 1.4)
    ALPHA_RANGE = (0.7, 1.0)

    def __init__(self, rng=None, config=Config, seed=None):
        if rng is None:
            rng, _ = seeding.np_random(seed)
        self.rng = rng
        self.config = config

    def generate(self, descriptor):
        item_types = SIMILAR_ITEM_TYPES if descriptor.similar_items else tuple(ItemType)
        max_x = max(0.0, self.config.ARENA_WIDTH - self.config.ITEM_FOOTPRINT)
        max_y = max(0.0, self.config.ARENA_HEIGHT - self.config.ITEM_FOOTPRINT)
        velocity_scale = descriptor.speed * self.config.VELOCITY_SCALE

        items = []
        for index in range(descriptor.item_count):
            item_type = item_types[self.rng.integers(len(item_types))]
            vx, vy = (self.rng.random(2) - 0.5) * velocity_scale
            items.append(Item(
                id=f"item_{index}",
                type=item_type,
                x=float(self.rng.uniform(0.0, max_x)),
                y=float(self.rng.uniform(0.0, max_y)),
                vx=float(vx),
                vy=float(vy),
                rotation=self._draw(descriptor.has_rotation, self.ROTATION_RANGE, 0.0),
                scale=self._draw(descriptor.has_scale, self.SCALE_RANGE, 1.0),
                alpha=self._draw(descriptor.has_alpha, self.ALPHA_RANGE, 1.0),
            ))
        return items

    def choose_target(self, items, descriptor):
        """Return ``(target_type, correct_answer)`` for the generated items."""
        if descriptor.count_all or not items:
            return None, len(items)
        present = [t for t in ItemType if any(item.type is t for item in items)]
        target = present[self.rng.integers(len(present))]
        return target, sum(1 for item in items if item.type is target)

    def _draw(self, enabled, bounds, neutral):
        if not enabled:
            return neutral
        return float(self.rng.uniform(*bounds))


def count_of(items, item_type=None):
    if item_type is None:
        return len(items)
    return sum(1 for item in items if item.type is item_type)
