import pytest

from mlb_game_threads.cli._output import print_error, print_thread_preview
from mlb_game_threads.game.plays import Announcement
from mlb_game_threads.presentation.blocks import ContentBlock, EmbedField


class TestPrintThreadPreview:
    def test_prints_blocks_and_announcements(self, capsys: pytest.CaptureFixture[str]) -> None:
        blocks = [ContentBlock(title="Away @ Home", description="[b]Game Status:[/b] Scheduled")]
        announcements = [
            Announcement(0, (ContentBlock(author_name="Top 1st, 1 out", title="Single"),)),
            Announcement(1, (ContentBlock(title="Home Run", fields=(EmbedField("Score", "1-0 Away"),)),), pin=True),
        ]

        print_thread_preview("Away @ Home - Fri 05 Apr 2024", blocks, announcements)

        out = capsys.readouterr().out
        assert "Thread: Away @ Home - Fri 05 Apr 2024" in out
        assert "[b]Game Status:[/b] Scheduled" in out
        assert "Announcements: 2" in out
        assert "play 0" in out
        assert "play 1 (pinned)" in out
        assert "1-0 Away" in out

    def test_no_announcements(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_thread_preview("Away @ Home", [], [])
        assert "Announcements: 0" in capsys.readouterr().out


def test_print_error_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    print_error("schedule: [down]")
    captured = capsys.readouterr()
    assert "Error: schedule: [down]" in captured.err
    assert captured.out == ""
