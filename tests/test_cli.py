from pathlib import Path

from typer.testing import CliRunner

from lyricquiz.cli import app


runner = CliRunner()


def _corpus(root: Path, songs) -> Path:
    for album, title, text in songs:
        path = root / album / f"{title}.txt"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def test_check_perfect():
    result = runner.invoke(app, ["check", "deeper than the sea", "deeper than the sea"])
    assert result.exit_code == 0
    assert "26" in result.output


def test_check_short_guess():
    result = runner.invoke(app, ["check", "deep", "deeper than the sea"])
    assert result.exit_code == 0
    assert "significantly shorter" in result.output


def test_list(tmp_path):
    _corpus(tmp_path, [("Ocean", "Depths", "I love you\ndeeper than the sea\n")])
    result = runner.invoke(app, ["list", "--lyrics-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "Depths" in result.output


def test_play_until_input_ends(tmp_path):
    _corpus(tmp_path, [("Ocean", "Depths", "I love you\ndeeper than the sea\n")])
    result = runner.invoke(
        app,
        ["play", "--lyrics-dir", str(tmp_path), "--seed", "1", "--no-clear", "--no-intro"],
        input="deeper than the sea\n\n",
    )
    assert result.exit_code == 0
    assert "Final score" in result.output
    assert "26" in result.output


def test_play_reports_unusable_corpus_and_exits_cleanly(tmp_path):
    _corpus(tmp_path, [("A", "one", "only line\n"), ("B", "two", "another line\n")])
    result = runner.invoke(app, ["play", "--lyrics-dir", str(tmp_path), "--no-clear", "--no-intro"])
    assert result.exit_code == 0
    assert "Error" in result.output


def test_play_missing_lyrics_dir_exits_cleanly(tmp_path):
    result = runner.invoke(app, ["play", "--lyrics-dir", str(tmp_path / "missing"), "--no-clear", "--no-intro"])
    assert result.exit_code == 0
    assert "Lyrics directory not found" in result.output
    assert "Final score" not in result.output


def test_list_missing_lyrics_dir_exits_cleanly(tmp_path):
    result = runner.invoke(app, ["list", "--lyrics-dir", str(tmp_path / "missing")])
    assert result.exit_code == 0
    assert "Lyrics directory not found" in result.output
