import logging
from datetime import timedelta
from pathlib import Path

import pytest

from medianorm.domain.policies.media_formatter import MediaInfoFormatter
from medianorm.domain.ports.probe import MediaFileNotFoundError, ProbeError
from medianorm.services.mediainfo.reader import VideoFileInfoReader
from medianorm.services.probe.ffprobe_adapter import parse_ffprobe_json


class FakeProber:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def analyze(self, path: Path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def media_file(tmp_path):
    f = tmp_path / "Show.S01E01.1080p.HEVC-GRP.mkv"
    f.write_bytes(b"dummy")
    return f


def _reader(prober, diagnostics, **kw):
    return VideoFileInfoReader(prober=lambda: prober, formatter=MediaInfoFormatter(diagnostics), **kw)


def test_read_builds_model(media_file, ffprobe_json, diagnostics):
    prober = FakeProber(parse_ffprobe_json(ffprobe_json))
    mi = _reader(prober, diagnostics).read(media_file)

    assert prober.calls == [media_file]
    assert mi.audio_format == "eac3"
    assert mi.run_time == timedelta(minutes=42, seconds=17.1)


def test_read_missing_file_raises_before_probing(tmp_path, diagnostics):
    prober = FakeProber()
    with pytest.raises(MediaFileNotFoundError):
        _reader(prober, diagnostics).read(tmp_path / "gone.mkv")
    assert prober.calls == []


def test_read_uses_injected_existence_check(ffprobe_json, diagnostics):
    prober = FakeProber(parse_ffprobe_json(ffprobe_json))
    reader = _reader(prober, diagnostics, file_exists=lambda p: True)
    assert reader.read("/not/on/disk.mkv").video_format == "hevc"


def test_get_media_info_isolates_probe_failure(media_file, diagnostics, caplog):
    caplog.set_level(logging.ERROR)
    reader = _reader(FakeProber(error=ProbeError("ffprobe returned non-zero exit code", rc=1)), diagnostics)

    assert reader.get_media_info(media_file) is None
    assert any(str(media_file) in r.getMessage() for r in caplog.records)


def test_get_media_info_missing_file_is_none(tmp_path, diagnostics, caplog):
    caplog.set_level(logging.ERROR)
    reader = _reader(FakeProber(), diagnostics)
    assert reader.get_media_info(tmp_path / "gone.mkv") is None
    assert any("does not exist" in r.getMessage() for r in caplog.records)


def test_get_media_info_isolates_unexpected_errors(media_file, diagnostics):
    reader = _reader(FakeProber(error=KeyError("streams")), diagnostics)
    assert reader.get_media_info(media_file) is None


def test_get_run_time(media_file, ffprobe_json, diagnostics, tmp_path):
    reader = _reader(FakeProber(parse_ffprobe_json(ffprobe_json)), diagnostics)
    assert reader.get_run_time(media_file) == timedelta(minutes=42, seconds=17.1)
    assert reader.get_run_time(tmp_path / "gone.mkv") is None


def test_analyze_uses_file_name_as_release_name(media_file, ffprobe_json, diagnostics):
    reader = _reader(FakeProber(parse_ffprobe_json(ffprobe_json)), diagnostics)
    n = reader.analyze(media_file)
    assert n.video_codec == "HEVC"
    assert n.audio_codec == "EAC3"
    assert n.video_dynamic_range == "HDR"


def test_analyze_explicit_release_name(media_file, ffprobe_json, diagnostics):
    reader = _reader(FakeProber(parse_ffprobe_json(ffprobe_json)), diagnostics)
    assert reader.analyze(media_file, scene_name="Show.S01E01.x265-GRP").video_codec == "x265"
    assert reader.analyze(media_file, scene_name="").video_codec == "h265"


def test_analyze_failure_is_none(media_file, diagnostics):
    reader = _reader(FakeProber(error=ProbeError("boom")), diagnostics)
    assert reader.analyze(media_file) is None
