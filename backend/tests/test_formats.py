"""Tests for format validation and the static lookup tables."""

import pytest

from audio_converter.core.errors import ErrorKind, InvalidFormatError
from audio_converter.services.formats import (
    CODEC_DIRECTIVES,
    CONTENT_TYPES,
    INVALID_FORMAT_MESSAGE,
    SUPPORTED_FORMATS,
    codec_args,
    content_type_for,
    resolve_input_extension,
    validate_format,
)


class TestValidateFormat:
    @pytest.mark.parametrize("fmt", SUPPORTED_FORMATS)
    def test_supported_formats_pass(self, fmt):
        assert validate_format(fmt) == fmt

    @pytest.mark.parametrize("fmt", ["MP3", " ogg", "Opus"])
    def test_match_is_exact(self, fmt):
        with pytest.raises(InvalidFormatError):
            validate_format(fmt)

    @pytest.mark.parametrize("fmt", ["wav", "flac", "", None])
    def test_unsupported_format_rejected(self, fmt):
        with pytest.raises(InvalidFormatError) as exc_info:
            validate_format(fmt)
        assert exc_info.value.kind == ErrorKind.INVALID_FORMAT
        assert exc_info.value.message == INVALID_FORMAT_MESSAGE
        assert exc_info.value.status_code == 400

    def test_message_lists_formats(self):
        assert INVALID_FORMAT_MESSAGE == "Invalid format. Supported: ogg, mp3, opus, m4a, aac"


class TestResolveInputExtension:
    def test_filename_extension_wins(self):
        assert resolve_input_extension("voice.note.WAV", "audio/mpeg") == "wav"

    def test_mpeg_mime_without_filename(self):
        assert resolve_input_extension(None, "audio/mpeg") == "mp3"

    def test_unknown_mime_without_filename(self):
        assert resolve_input_extension(None, "application/octet-stream") == ""

    def test_nothing_declared(self):
        assert resolve_input_extension(None, None) == ""

    def test_filename_without_extension_falls_back_to_mime(self):
        assert resolve_input_extension("recording", "audio/x-m4a") == "m4a"

    def test_mime_parameters_ignored(self):
        assert resolve_input_extension(None, "audio/webm; codecs=opus") == "webm"

    @pytest.mark.parametrize(
        "mime,ext",
        [
            ("audio/wav", "wav"),
            ("audio/ogg", "ogg"),
            ("audio/flac", "flac"),
            ("audio/aac", "aac"),
            ("audio/mp4", "m4a"),
            ("video/webm", "webm"),
        ],
    )
    def test_mime_table(self, mime, ext):
        assert resolve_input_extension("", mime) == ext


class TestCodecArgs:
    def test_bitrate_injected_verbatim(self):
        assert codec_args("mp3", "192k") == ["-c:a", "libmp3lame", "-b:a", "192k"]

    def test_m4a_and_aac_share_encoder(self):
        assert codec_args("m4a", "128k") == codec_args("aac", "128k")

    def test_unknown_format_defaults_to_vorbis(self):
        assert codec_args("xyz", "64k")[1] == "libvorbis"

    def test_every_supported_format_has_directive(self):
        assert set(CODEC_DIRECTIVES) == set(SUPPORTED_FORMATS)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CODEC_DIRECTIVES["wav"] = "pcm_s16le"


class TestContentType:
    def test_known_formats(self):
        assert content_type_for("mp3") == "audio/mpeg"
        assert content_type_for("m4a") == "audio/mp4"
        assert content_type_for("opus") == "audio/opus"

    def test_default_is_ogg(self):
        assert content_type_for("wav") == "audio/ogg"

    def test_every_supported_format_mapped(self):
        assert set(CONTENT_TYPES) == set(SUPPORTED_FORMATS)
