"""Tests for the subcommand dispatcher and the subcommand CLIs."""

import pytest
import yaml


class TestMainDispatcher:
    def test_no_subcommand_shows_help(self, capsys):
        from slidecast.main import main

        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0

    @pytest.mark.parametrize("command", ["compose", "slides", "probe"])
    def test_subcommand_exists(self, command):
        """Subcommand is recognized; it then fails on missing required args."""
        from slidecast.main import main

        with pytest.raises(SystemExit):
            main([command])

    def test_invalid_subcommand_errors(self, capsys):
        from slidecast.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["nonexistent"])
        assert exc_info.value.code != 0


class TestComposeCli:
    def _manifest(self, tmp_path, **overrides):
        (tmp_path / "deck.mp4").write_text("fake")
        (tmp_path / "camera.mp4").write_text("fake")
        m = {
            "paths": {"dir": str(tmp_path)},
            "deck": "${dir}/deck.mp4",
            "recording": "${dir}/camera.mp4",
            "output": "${dir}/final.mp4",
            "quality": "draft",
            "timings": [0.0, 5.0],
        }
        m.update(overrides)
        path = tmp_path / "request.yaml"
        path.write_text(yaml.dump(m))
        return str(path)

    def test_validate_only(self, tmp_path, capsys):
        from slidecast.compose_cli import main

        main(["--manifest", self._manifest(tmp_path), "--validate"])
        assert "Request valid" in capsys.readouterr().out

    def test_invalid_request_exits_with_message(self, tmp_path, capsys):
        from slidecast.compose_cli import main

        path = self._manifest(tmp_path, overlay={"width": 0.8})
        with pytest.raises(SystemExit) as exc_info:
            main(["--manifest", path, "--validate"])
        assert exc_info.value.code == 1
        assert "overlay_relative_width" in capsys.readouterr().err

    def test_dry_run_prints_command(self, tmp_path, capsys, monkeypatch):
        from slidecast.compose_cli import main

        monkeypatch.setenv("SLIDECAST_FFMPEG", "/opt/ffmpeg")
        main(["--manifest", self._manifest(tmp_path), "--dry-run"])
        out = capsys.readouterr().out.strip()
        assert out.startswith("/opt/ffmpeg -y")
        assert out.endswith(str(tmp_path / "final.mp4"))
        assert "-crf 32 -preset veryfast" in out


class TestSlidesCli:
    def test_durations_mode(self, tmp_path, monkeypatch, capsys):
        from slidecast import slides_cli

        calls = {}

        def fake_assemble(frames_dir, durations, output):
            calls["args"] = (frames_dir, durations, output)

        monkeypatch.setattr(slides_cli, "assemble_slideshow", fake_assemble)
        slides_cli.main([
            "--frames-dir", str(tmp_path), "--durations", "2,3.5",
            "--output", str(tmp_path / "s.mp4"),
        ])
        assert calls["args"] == (str(tmp_path), [2.0, 3.5], str(tmp_path / "s.mp4"))

    def test_missing_slide_exits_with_message(self, tmp_path, capsys, monkeypatch):
        from slidecast import slides_cli

        monkeypatch.setenv("SLIDECAST_FFMPEG", "ffmpeg")
        frames = tmp_path / "frames"
        frames.mkdir()
        with pytest.raises(SystemExit) as exc_info:
            slides_cli.main([
                "--frames-dir", str(frames), "--durations", "1,1",
                "--output", str(tmp_path / "s.mp4"),
            ])
        assert exc_info.value.code == 1
        assert "missing slide image 0" in capsys.readouterr().err

    def test_requires_a_mode(self, tmp_path):
        from slidecast.slides_cli import main

        with pytest.raises(SystemExit):
            main(["--frames-dir", str(tmp_path), "--output", str(tmp_path / "s.mp4")])


class TestConfigCli:
    def test_set_and_show(self, tmp_path, monkeypatch, capsys):
        from slidecast.config_cli import main

        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("SLIDECAST_FFMPEG", raising=False)
        main(["--ffmpeg-path", "/opt/ffmpeg/bin/ffmpeg"])
        out = capsys.readouterr().out
        assert "Configured:  /opt/ffmpeg/bin/ffmpeg" in out
        assert "Effective:   /opt/ffmpeg/bin/ffmpeg" in out
