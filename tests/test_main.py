"""Tests for the command line entry point."""

import json

import pytest

import miniprinter.main as cli
from miniprinter.config.settings import Settings
from miniprinter.errors import RenderError

from conftest import FakeRasterizer


@pytest.fixture
def puzzle_file(tmp_path, sample_payload):
    path = tmp_path / "mini.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path


@pytest.fixture
def fake_render(monkeypatch):
    fake = FakeRasterizer()
    monkeypatch.setattr(cli, "render_board", fake)
    return fake


class TestApplyOverrides:

    def test_preview_flag(self):
        args = cli.build_parser().parse_args(["--preview"])
        settings = cli.apply_overrides(Settings(), args)
        assert settings.printer.transport == "preview"

    def test_serial_flag(self):
        args = cli.build_parser().parse_args(["--serial", "/dev/ttyUSB0"])
        settings = cli.apply_overrides(Settings(), args)
        assert settings.printer.transport == "serial"
        assert settings.printer.port == "/dev/ttyUSB0"

    def test_output_and_url(self, tmp_path):
        args = cli.build_parser().parse_args(["--output", str(tmp_path / "out.bin"), "--url", "http://x/mini.json"])
        settings = cli.apply_overrides(Settings(), args)
        assert settings.printer.output == tmp_path / "out.bin"
        assert settings.fetch.url == "http://x/mini.json"

    def test_no_flags_keep_environment(self, monkeypatch):
        monkeypatch.setenv("MINIPRINTER_PRINTER__TRANSPORT", "preview")
        args = cli.build_parser().parse_args([])
        settings = cli.apply_overrides(Settings(), args)
        assert settings.printer.transport == "preview"
        assert settings.debug is False

    def test_transports_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--preview", "--serial", "/dev/ttyS0"])


class TestMain:

    def test_preview_from_file(self, puzzle_file, fake_render, capsys):
        cli.main(["--file", str(puzzle_file), "--preview"])

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "+" + "-" * 32 + "+"
        assert out[1] == "|The NYT Mini Crossword          |"
        assert "|By Alex Rivera                  |" in out
        assert out[-1] == out[0]
        assert fake_render.calls[0][1:] == (384, 203.0)

    def test_escpos_to_file(self, puzzle_file, fake_render, tmp_path):
        out = tmp_path / "receipt.bin"
        cli.main(["--file", str(puzzle_file), "--output", str(out)])

        data = out.read_bytes()
        assert data.startswith(b"\x1b@The NYT Mini Crossword\n")
        assert data.endswith(b"Edited by Jordan Lee\n\x1bd\x03\x1dV\x01")

    def test_save_board(self, puzzle_file, fake_render, tmp_path):
        board = tmp_path / "board.png"
        cli.main(["--file", str(puzzle_file), "--preview", "--save-board", str(board)])

        assert board.read_bytes().startswith(b"\x89PNG")

    def test_missing_file_exits_nonzero(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--file", str(tmp_path / "missing.json"), "--preview"])
        assert excinfo.value.code == 1

    def test_bad_clue_index_exits_nonzero(self, tmp_path, sample_payload, fake_render, capsys):
        sample_payload["body"][0]["clueLists"][0]["clues"] = [0, 99]
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(sample_payload), encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--file", str(path), "--preview"])

        assert excinfo.value.code == 1
        out = capsys.readouterr().out
        assert "Edited by" not in out

    def test_render_error_prints_nothing(self, puzzle_file, monkeypatch, capsys):
        def broken(markup, width, dpi):
            raise RenderError("bad board")

        monkeypatch.setattr(cli, "render_board", broken)

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--file", str(puzzle_file), "--preview"])

        assert excinfo.value.code == 1
        assert capsys.readouterr().out == ""
