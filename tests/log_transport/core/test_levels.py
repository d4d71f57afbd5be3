from datetime import timezone

from log_transport.core.domain.levels import (
    LEVEL_LABELS,
    LEVEL_NUMBERS,
    TimestampRenderer,
    default_level_palette,
    iso_timestamp,
    label_for,
    resolve_timezone,
)


def test_level_labels_cover_six_severities():
    assert LEVEL_LABELS == {
        10: "trace",
        20: "debug",
        30: "info",
        40: "warn",
        50: "error",
        60: "fatal",
    }
    assert LEVEL_NUMBERS["warn"] == 40


def test_label_for_unknown_level():
    assert label_for(30) == "info"
    assert label_for(35) is None
    assert label_for(None) is None


def test_default_palette_without_colors_is_padded_plain_text():
    palette = default_level_palette(colors=False)

    assert palette[30] == "INFO "
    assert palette[40] == "WARN "
    assert palette[50] == "ERROR"
    assert all("\x1b" not in label for label in palette.values())


def test_default_palette_with_colors_uses_truecolor():
    palette = default_level_palette(colors=True)

    assert palette[30].startswith("\x1b[38;2;178;157;243m")
    assert "INFO " in palette[30]
    assert palette[30].endswith("\x1b[0m")


def test_timestamp_renderer_utc():
    renderer = TimestampRenderer("UTC")

    assert renderer.render(1700000000000) == "14 Nov 2023, 22:13:20 UTC"
    assert renderer(1700000000000) == renderer.render(1700000000000)


def test_timestamp_renderer_defaults_to_phoenix():
    renderer = TimestampRenderer()

    assert renderer.render(1700000000000) == "14 Nov 2023, 15:13:20 MST"


def test_timestamp_renderer_single_digit_day():
    # 2024-03-05T12:00:00Z
    assert TimestampRenderer("UTC").render(1709640000000) == "5 Mar 2024, 12:00:00 UTC"


def test_resolve_timezone_prefers_tz_env(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Berlin")

    assert str(resolve_timezone()) == "Europe/Berlin"
    assert resolve_timezone("UTC") is timezone.utc


def test_resolve_timezone_invalid_name_falls_back():
    assert str(resolve_timezone("Not/AZone")) == "America/Phoenix"


def test_iso_timestamp_has_milliseconds_and_z():
    assert iso_timestamp(1700000000123) == "2023-11-14T22:13:20.123Z"
