"""Item motion: integration, wall reflection and pairwise elastic collisions."""

from dataclasses import replace

import numpy as np

from .config import Config


def tick(items, dt, arena_width, arena_height, config=Config):
    """Advance ``items`` by ``dt`` seconds and return the new item list.

    Collisions are resolved one pair at a time in ``(i, j)`` index order with
    ``i < j``. A pair sees the positions and velocities left behind by the
    pairs resolved before it in the same tick.
    """
    if not items:
        return []

    footprint = config.ITEM_FOOTPRINT
    upper = np.array([max(0.0, arena_width - footprint), max(0.0, arena_height - footprint)])

    pos = np.array([(item.x, item.y) for item in items], dtype=float)
    vel = np.array([(item.vx, item.vy) for item in items], dtype=float)
    radii = np.array([item.scale for item in items], dtype=float) * config.BASE_ITEM_SIZE / 2.0

    # --- Integration + boundary reflection ---
    pos += vel * dt
    out_of_bounds = (pos < 0.0) | (pos > upper)
    vel[out_of_bounds] *= -1
    pos = np.clip(pos, 0.0, upper)

    # --- Pairwise collisions ---
    resolve_collisions(pos, vel, radii)

    # Separation can push an item through a wall
    pos = np.clip(pos, 0.0, upper)

    return [
        replace(item, x=float(pos[i, 0]), y=float(pos[i, 1]), vx=float(vel[i, 0]), vy=float(vel[i, 1]))
        for i, item in enumerate(items)
    ]


def resolve_collisions(pos, vel, radii):
    """Resolve overlapping pairs in place. Returns the number of collisions."""
    collisions = 0
    n = len(pos)
    for i in range(n):
        for j in range(i + 1, n):
            min_dist = radii[i] + radii[j]
            delta = pos[j] - pos[i]
            dist = np.linalg.norm(delta)
            if dist >= min_dist:
                continue

            collisions += 1
            # Equal masses: velocities are exchanged
            vel[[i, j]] = vel[[j, i]]

            if dist > 0:
                normal = delta / dist
                overlap = (min_dist - dist) / 2.0
                pos[i] -= normal * overlap
                pos[j] += normal * overlap
            else:
                # Coincident centres, push apart along x
                pos[i, 0] -= min_dist / 2.0
                pos[j, 0] += min_dist / 2.0
    return collisions
