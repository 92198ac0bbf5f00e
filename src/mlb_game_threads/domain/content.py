from dataclasses import dataclass


@dataclass(frozen=True)
class Highlight:
    id: str
    slug: str = ""
    title: str = ""
    description: str = ""
    duration: str = ""
    date: str = ""


@dataclass(frozen=True)
class MediaFeed:
    """One TV or radio feed from the content EPG."""

    kind: str
    feed_type: str = ""
    call_letters: str = ""


@dataclass(frozen=True)
class GameContent:
    highlights: tuple[Highlight, ...] = ()
    media: tuple[MediaFeed, ...] = ()

    def tv_feeds(self) -> list[MediaFeed]:
        return [feed for feed in self.media if feed.kind == "tv"]

    def radio_feeds(self) -> list[MediaFeed]:
        return [feed for feed in self.media if feed.kind == "radio"]

    def latest_highlights(self, limit: int) -> list[Highlight]:
        ordered = sorted(self.highlights, key=lambda h: h.date, reverse=True)
        return ordered[:limit]
