from typing import Tuple

from .base import BaseGolfModel


class PlayerProfile(BaseGolfModel):
    """What the caddie has learned about the player across rounds."""
    tendencies: Tuple[str, ...] = ()

    def with_tendency(self, tendency: str) -> "PlayerProfile":
        """Record a tendency unless the same one is already known."""
        tendency = tendency.strip()
        if not tendency or tendency in self.tendencies:
            return self
        return self.evolve(tendencies=self.tendencies + (tendency,))
