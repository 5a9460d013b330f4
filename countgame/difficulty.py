from .models import DifficultyDescriptor


def for_stage(stage: int) -> DifficultyDescriptor:
    """Difficulty tier for a 1-based stage number."""
    if stage <= 0:
        raise ValueError(f"stage must be positive, got {stage}")

    if stage <= 3:
        return DifficultyDescriptor(
            stage=stage, item_count=5 + stage, speed=1.0, time_limit=8,
        )
    if stage <= 6:
        return DifficultyDescriptor(
            stage=stage, item_count=8 + stage, speed=1.2, time_limit=7,
            has_rotation=True,
        )
    if stage <= 10:
        return DifficultyDescriptor(
            stage=stage, item_count=12 + stage, speed=1.5, time_limit=6,
            has_rotation=True, has_alpha=True,
        )
    if stage <= 15:
        # From here on only one category is counted
        return DifficultyDescriptor(
            stage=stage, item_count=18 + stage, speed=1.8, time_limit=5,
            has_rotation=True, has_alpha=True, has_scale=True,
            count_all=False,
        )
    return DifficultyDescriptor(
        stage=stage,
        item_count=25 + 2 * (stage - 15),
        speed=2.0 + 0.1 * (stage - 15),
        time_limit=4,
        has_rotation=True, has_alpha=True, has_scale=True, similar_items=True,
        count_all=False,
    )
