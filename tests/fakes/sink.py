from collections.abc import Sequence
from dataclasses import dataclass, field

from mlb_game_threads.discord.publisher import ThreadHandle
from mlb_game_threads.presentation.blocks import ContentBlock


@dataclass
class PostedMessage:
    handles: tuple[ThreadHandle, ...]
    blocks: list[ContentBlock]
    pin: bool


@dataclass
class RecordingSink:
    """GameThreadSink that records every call instead of talking to Discord."""

    handles: list[ThreadHandle] = field(default_factory=lambda: [ThreadHandle(guild_id=1, thread_id=10, starter_message_id=11)])
    created: list[tuple[str, list[ContentBlock]]] = field(default_factory=list)
    edits: list[list[ContentBlock]] = field(default_factory=list)
    posts: list[PostedMessage] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return len(self.created) + len(self.edits) + len(self.posts)

    async def create_threads(self, title: str, blocks: Sequence[ContentBlock]) -> list[ThreadHandle]:
        self.created.append((title, list(blocks)))
        return list(self.handles)

    async def edit_root_message(self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock]) -> None:
        self.edits.append(list(blocks))

    async def post_message(
        self, handles: Sequence[ThreadHandle], blocks: Sequence[ContentBlock], *, pin: bool = False
    ) -> None:
        self.posts.append(PostedMessage(tuple(handles), list(blocks), pin))
