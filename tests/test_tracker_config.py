import pytest

from kphtracker.components.tracker_config import OverlayPosition, TrackerConfig


def test_defaults():
    config = TrackerConfig()
    assert config.retention_hours == 24
    assert config.recent_window_minutes == 15
    assert config.sweep_interval_ticks == 100
    assert config.auto_track_last_killed is True
    assert config.use_recent_kph_for_estimate is False
    assert config.overlay_position is OverlayPosition.TOP_LEFT


def test_numeric_settings_are_clamped():
    config = TrackerConfig(retention_hours=500, recent_window_minutes=1, sweep_interval_ticks=0)
    assert config.retention_hours == 168
    assert config.recent_window_minutes == 5
    assert config.sweep_interval_ticks == 1


def test_configure_updates_and_clamps():
    config = TrackerConfig()
    config.configure(recent_window_minutes=600, overlay_position="bottom_right", show_overlay=False)
    assert config.recent_window_minutes == 120
    assert config.overlay_position is OverlayPosition.BOTTOM_RIGHT
    assert config.show_overlay is False


def test_configure_rejects_unknown_keys():
    config = TrackerConfig()
    with pytest.raises(TypeError):
        config.configure(retention_days=3)


def test_unparseable_values_fall_back_to_defaults():
    config = TrackerConfig(retention_hours="soon", overlay_position="middle")
    assert config.retention_hours == 24
    assert config.overlay_position is OverlayPosition.TOP_LEFT
