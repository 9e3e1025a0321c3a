import dataclasses

import pytest

from skybird.config import ConfigError, Settings
from skybird.session import Session


def test_default_settings_validate() -> None:
    settings = Settings()
    assert settings.validate() is settings


def test_pipe_max_height_leaves_room_for_gap() -> None:
    settings = Settings(field_height=400, pipe_gap=150, pipe_min_height=50)
    assert settings.pipe_max_height == 200
    assert settings.pipe_max_height + settings.pipe_gap <= settings.field_height - settings.pipe_min_height


@pytest.mark.parametrize(
    "overrides",
    [
        {"pipe_gap": 350, "field_height": 400},  # empty spawn range
        {"field_height": 0},
        {"pipe_width": -5},
        {"pipe_spawn_ms": 0},
        {"jump_impulse": 3.0},
        {"pipe_min_height": -1},
        {"bird_size": 640},
        {"field_height": 400, "bird_size": 250, "pipe_gap": 100},  # bird cannot fit below mid-field
        {"pipe_gap": 150.5},
        {"field_height": 640.25},
        {"pipe_min_height": 49.9},
        {"bird_x": 470},
        {"cloud_speed_factor": 0.9, "tree_speed_factor": 0.8},
        {"scroll_speed": 80.0},
    ],
)
def test_invalid_settings_rejected(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        Settings(**overrides).validate()


def test_config_error_is_value_error() -> None:
    assert issubclass(ConfigError, ValueError)


def test_session_rejects_invalid_settings_at_startup() -> None:
    with pytest.raises(ConfigError):
        Session(Settings(field_height=300, pipe_gap=250))


def test_settings_are_frozen() -> None:
    settings = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.pipe_gap = 10  # type: ignore[misc]


def test_bird_filling_lower_half_is_allowed() -> None:
    Settings(field_height=400, bird_size=200, pipe_gap=100).validate()


def test_whole_number_floats_spawn_integer_pipes() -> None:
    s = Session(Settings(pipe_gap=150.0, field_height=640.0))
    s.scheduler.advance(1500)
    assert len(s.pipes) == 1
    assert isinstance(s.pipes[0].top_height, int)
    assert s.pipes[0].bottom_y == s.pipes[0].top_height + 150
