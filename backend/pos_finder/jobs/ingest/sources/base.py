from abc import ABC, abstractmethod


class BaseSource(ABC):
    name: str = "base"

    @abstractmethod
    def fetch(self) -> list[dict]:
        """
        Return the raw feed entries (plain dicts as decoded from the feed).
        Raise FeedUnavailable when the feed cannot be retrieved or decoded.
        """
        raise NotImplementedError
