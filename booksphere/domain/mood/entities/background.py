from dataclasses import dataclass

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.value_objects.ids import BackgroundId, MoodId


@dataclass(eq=False)
class Background(Entity[BackgroundId]):
    """Background image stored for a mood; ``path`` is a storage path, not a URL."""

    id: BackgroundId
    mood_id: MoodId
    path: str
