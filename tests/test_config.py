import json
import math

import numpy as np
import pytest

from navicam.camera.first_person import FirstPerson, FirstPersonSettings
from navicam.camera.orbit_zoom import OrbitZoomCamera, OrbitZoomCameraSettings
from navicam.core.config import Config
from navicam.input.buttons import Button
from navicam.input.events import PressEvent


def _write(path, data) -> None:
    path.write_text(json.dumps(data))


def test_missing_file_uses_defaults_without_writing(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    config = Config(str(path))

    assert config.get("first_person.layout") == "wasd"
    assert config.get("orbit_zoom.distance") == 10.0
    assert not path.exists()


def test_loaded_values_override_defaults(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {"orbit_zoom": {"zoom_speed": 0.5}})

    config = Config(str(path))

    assert config.get("orbit_zoom.zoom_speed") == 0.5
    assert config.get("orbit_zoom.pan_speed") == 0.1
    assert config.get("first_person.speed_vertical") == 1.0


def test_invalid_json_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    path.write_text("{not json")

    config = Config(str(path))

    assert config.data == config.defaults


def test_defaults_are_not_shared_with_data(tmp_path) -> None:
    config = Config(str(tmp_path / "navicam.json"))
    config.set("orbit_zoom.orbit_speed", 1.0)

    assert config.defaults["orbit_zoom"]["orbit_speed"] == 0.05


def test_get_set_dotted_paths(tmp_path) -> None:
    config = Config(str(tmp_path / "navicam.json"))

    config.set("viewer.window.width", 640)

    assert config.get("viewer.window.width") == 640
    assert config.get("viewer.missing", "fallback") == "fallback"
    assert config.get("first_person.layout.nested") is None


def test_save_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "navicam.json"
    config = Config(str(path))
    config.set("first_person.layout", "esdf")
    config.save()

    reloaded = Config(str(path))

    assert reloaded.get("first_person.layout") == "esdf"


def test_first_person_settings_from_config(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {
        "first_person": {
            "layout": "esdf",
            "move_forward_button": "key:up",
            "speed_horizontal": 5,
        }
    })

    settings = FirstPersonSettings.from_config(Config(str(path)))

    assert settings.move_forward_button == Button.key("up")
    assert settings.move_backward_button == Button.key("d")
    assert settings.move_faster_button == Button.key("lshift")
    assert settings.speed_horizontal == 5.0
    assert settings.mouse_sensitivity == pytest.approx(math.pi / 4.0 / 360.0)


def test_first_person_from_config_drives_controller(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {"first_person": {"move_forward_button": "key:up", "speed_horizontal": 2.0}})

    fp = FirstPerson([0.0, 0.0, 0.0], FirstPersonSettings.from_config(Config(str(path))))

    fp.event(PressEvent(Button.key("up")))
    fp.update(1.0)

    np.testing.assert_allclose(fp.position, [0.0, 0.0, -2.0])


def test_unknown_layout_is_rejected(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {"first_person": {"layout": "dvorak"}})

    with pytest.raises(ValueError):
        FirstPersonSettings.from_config(Config(str(path)))


def test_malformed_button_is_rejected(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {"orbit_zoom": {"pan_button": "shift"}})

    with pytest.raises(ValueError):
        OrbitZoomCameraSettings.from_config(Config(str(path)))


def test_orbit_zoom_from_config(tmp_path) -> None:
    path = tmp_path / "navicam.json"
    _write(path, {
        "orbit_zoom": {
            "orbit_button": "mouse:right",
            "zoom_speed": 1.0,
            "min_distance": 1.0,
            "distance": 3.0,
        }
    })

    orbit = OrbitZoomCamera.from_config([0.0, 0.0, 0.0], Config(str(path)))

    assert orbit.settings.orbit_button == Button.mouse("right")
    assert orbit.settings.pan_button == Button.key("lshift")
    assert orbit.settings.zoom_speed == 1.0
    assert orbit.distance == 3.0
    assert orbit.settings.min_distance == 1.0

