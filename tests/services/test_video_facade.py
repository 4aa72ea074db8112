import pytest

from ffvideo.domain.entities.media_info import MediaInfo
from ffvideo.services.probe.ffmpeg_text_adapter import FFmpegTextProbe
from ffvideo.services.video.video import Video, open_video

from fakes import BANNER, FakeProbe, FakeRunner


def test_video_probes_once_and_exposes_metadata(video_file):
    runner = FakeRunner(lines=BANNER)
    v = Video(video_file, probe=FFmpegTextProbe(runner=runner))

    assert v.duration == 90.5
    assert v.start_point == 0.0
    assert v.video_bitrate == 128
    assert v.video_codec == "h264"
    assert v.resolution == (1920, 1080)
    assert (v.width, v.height) == (1920, 1080)
    assert v.fps == 24
    assert v.audio_codec == "aac"
    assert v.sample_rate == 44100
    assert v.audio_bitrate == 96
    assert v.is_stereo is True
    assert v.raw_info.video_line.strip().startswith("Stream #0:0")
    # accessors never re-run the tool
    assert len(runner.calls) == 1


def test_missing_file_fails_before_probe(tmp_path):
    probe = FakeProbe()
    with pytest.raises(FileNotFoundError):
        Video(tmp_path / "gone.mp4", probe=probe)
    assert probe.calls == []


def test_html5_source_type_lowercases_extension(tmp_path):
    f = tmp_path / "Trailer.MP4"
    f.write_bytes(b"x")
    assert open_video(f, probe=FakeProbe()).html5_source_type == "video/mp4"


def test_open_returns_binary_reader(video_file):
    v = Video(video_file, probe=FakeProbe())
    with v.open() as fh:
        assert fh.read() == video_file.read_bytes()
    assert "rb" in fh.mode


def test_json_probe_has_no_raw_lines(video_file):
    v = Video(video_file, probe=FakeProbe(MediaInfo(duration=1.0)))
    assert v.raw_info is None
    assert v.info.duration == 1.0
    assert v.video_codec == "unknown"
