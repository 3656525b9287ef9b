import json
import subprocess
from datetime import timedelta
from types import SimpleNamespace

import pytest

import medianorm.services.probe.ffprobe_adapter as adapter_mod
from medianorm.domain.enums.stream_kind import StreamKind
from medianorm.domain.ports.probe import MediaFileNotFoundError, ProbeError
from medianorm.services.probe.ffprobe_adapter import FFprobeAdapter, parse_ffprobe_json


# ---- parsing -----------------------------------------------------------------

def test_parse_ffprobe_json_streams_and_container(ffprobe_json):
    pr = parse_ffprobe_json(ffprobe_json)

    assert pr.format.format_long_name == "Matroska / WebM"
    assert pr.format.duration == timedelta(seconds=2537.123)
    assert pr.format.size == 2576000000
    assert len(pr.streams) == 4
    assert pr.raw == ffprobe_json

    v = pr.primary_video_stream
    assert v.codec_type is StreamKind.video
    assert v.codec_name == "hevc"
    assert v.codec_tag_string == "[0][0][0][0]"
    assert v.bits_per_raw_sample == 10          # derived from pix_fmt
    assert v.bit_rate == 7000000                # from BPS tag
    assert v.duration == timedelta(minutes=42, seconds=17.1)
    assert 23.97 < v.frame_rate < 23.98
    assert v.color_primaries == "bt2020"
    assert v.color_transfer == "smpte2084"
    assert v.is_default is True

    a = pr.primary_audio_stream
    assert a.codec_name == "eac3"
    assert a.channels == 6
    assert a.channel_layout == "5.1(side)"
    assert a.language == "eng"
    assert a.bit_rate == 640000


def test_parse_ffprobe_json_tolerates_empty_payload():
    pr = parse_ffprobe_json({})
    assert pr.streams == ()
    assert pr.format.duration == timedelta(0)
    assert pr.primary_video_stream is None


def test_bits_per_raw_sample_wins_over_pix_fmt():
    pr = parse_ffprobe_json({"streams": [
        {"codec_type": "video", "codec_name": "h264", "bits_per_raw_sample": "8", "pix_fmt": "yuv420p10le"},
    ]})
    assert pr.primary_video_stream.bits_per_raw_sample == 8


def test_unknown_codec_type_is_kept_as_unknown():
    pr = parse_ffprobe_json({"streams": [{"codec_type": "weird"}]})
    assert pr.streams[0].codec_type is StreamKind.unknown


# ---- adapter ------------------------------------------------------------------

@pytest.fixture()
def media_file(tmp_path):
    f = tmp_path / "Show.S01E01.mkv"
    f.write_bytes(b"dummy")
    return f


@pytest.fixture()
def adapter(monkeypatch):
    monkeypatch.setattr(adapter_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
    return FFprobeAdapter(timeout_sec=7)


def test_adapter_resolves_binary_from_path(adapter):
    assert adapter.ffprobe_bin == "/usr/bin/ffprobe"
    assert adapter.timeout_sec == 7


def test_adapter_missing_binary(monkeypatch):
    monkeypatch.setattr(adapter_mod.shutil, "which", lambda name: None)
    with pytest.raises(ProbeError):
        FFprobeAdapter()


def test_adapter_absolute_binary_is_not_looked_up(monkeypatch):
    def _boom(name):
        raise AssertionError("which() should not be called")
    monkeypatch.setattr(adapter_mod.shutil, "which", _boom)
    assert FFprobeAdapter(ffprobe_bin="/opt/ff/ffprobe").ffprobe_bin == "/opt/ff/ffprobe"


def test_analyze_runs_ffprobe_and_parses(adapter, media_file, monkeypatch, ffprobe_json):
    calls = []

    def _run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return SimpleNamespace(returncode=0, stdout=json.dumps(ffprobe_json), stderr="")

    monkeypatch.setattr(adapter_mod.subprocess, "run", _run)
    pr = adapter.analyze(media_file)

    assert pr.primary_audio_stream.codec_name == "eac3"
    [(cmd, kwargs)] = calls
    assert cmd[0] == "/usr/bin/ffprobe"
    assert cmd[-1] == str(media_file)
    assert kwargs["timeout"] == 7
    assert kwargs["check"] is False


def test_analyze_missing_file(adapter, tmp_path):
    with pytest.raises(MediaFileNotFoundError):
        adapter.analyze(tmp_path / "nope.mkv")


def test_missing_file_error_is_a_file_not_found_error(adapter, tmp_path):
    target = tmp_path / "nope.mkv"
    with pytest.raises(FileNotFoundError) as ei:
        adapter.analyze(target)
    assert isinstance(ei.value, ProbeError)
    assert ei.value.path == target
    assert str(ei.value) == f"Media file does not exist: {target}"


def test_analyze_nonzero_exit(adapter, media_file, monkeypatch):
    monkeypatch.setattr(
        adapter_mod.subprocess, "run",
        lambda cmd, **kw: SimpleNamespace(returncode=1, stdout="", stderr="Invalid data found"),
    )
    with pytest.raises(ProbeError) as ei:
        adapter.analyze(media_file)
    assert ei.value.rc == 1
    assert ei.value.stderr == "Invalid data found"
    assert not isinstance(ei.value, MediaFileNotFoundError)


def test_analyze_timeout(adapter, media_file, monkeypatch):
    def _run(cmd, **kw):
        raise subprocess.TimeoutExpired(cmd, kw["timeout"])
    monkeypatch.setattr(adapter_mod.subprocess, "run", _run)
    with pytest.raises(ProbeError, match="timed out"):
        adapter.analyze(media_file)


def test_analyze_invalid_json(adapter, media_file, monkeypatch):
    monkeypatch.setattr(
        adapter_mod.subprocess, "run",
        lambda cmd, **kw: SimpleNamespace(returncode=0, stdout="{not json", stderr=""),
    )
    with pytest.raises(ProbeError, match="invalid JSON"):
        adapter.analyze(media_file)
