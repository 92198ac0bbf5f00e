from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class ContentBlock:
    """One section of a thread message, independent of the chat platform.

    The Discord publisher turns each block into an embed; the CLI preview
    prints them as plain text.
    """

    title: str = ""
    description: str = ""
    url: str = ""
    color: int | None = None
    author_name: str = ""
    author_url: str = ""
    author_icon_url: str = ""
    thumbnail_url: str = ""
    footer: str = ""
    fields: tuple[EmbedField, ...] = ()

    def text(self) -> str:
        parts = [part for part in (self.author_name, self.title, self.description) if part]
        parts.extend(f"{field.name}\n{field.value}" for field in self.fields)
        if self.footer:
            parts.append(self.footer)
        return "\n".join(parts)
