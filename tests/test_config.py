"""Tests for scene configuration and validation."""
import json
import pytest
from starswarm.config import (
    SceneConfig, StarFieldConfig, ShipConfig, ConfigError,
    load_config, validate_canvas_size,
)


class TestShipConfig:
    """Tests for ShipConfig validation."""

    def test_defaults_are_valid(self):
        """Test that the default configuration validates."""
        ShipConfig().validate()
        StarFieldConfig().validate()
        SceneConfig().validate()

    @pytest.mark.parametrize("option, value", [
        ("speed", 0.0),
        ("size", -1.0),
        ("edge_distance", 0.0),
        ("follow_distance", 0.0),
        ("tail_max_distance", 0.0),
        ("stuck_threshold", 0),
        ("stuck_escape_multiplier", 0.5),
        ("tail_opacity", 1.5),
        ("curve_change_rate", -0.1),
        ("count", -1),
    ])
    def test_rejects_out_of_range(self, option, value):
        """Test that out-of-range ship options are rejected."""
        config = ShipConfig(**{option: value})

        with pytest.raises(ConfigError, match=option):
            config.validate()

    def test_rejects_non_finite(self):
        """Test that NaN and infinity are rejected."""
        with pytest.raises(ConfigError, match="finite"):
            ShipConfig(speed=float("nan")).validate()

        with pytest.raises(ConfigError, match="finite"):
            ShipConfig(follow_strength=float("inf")).validate()

    def test_follow_index_range(self):
        """Test that follow_index must name an existing ship."""
        ShipConfig(count=3, follow_index=2).validate()

        with pytest.raises(ConfigError, match="follow_index"):
            ShipConfig(count=3, follow_index=3).validate()

    def test_bad_colors(self):
        """Test that malformed hex colors are rejected."""
        with pytest.raises(ConfigError, match="tail_start_color"):
            ShipConfig(tail_start_color="blue").validate()

        with pytest.raises(ConfigError, match="color"):
            ShipConfig(color="#12345").validate()


class TestStarFieldConfig:
    """Tests for StarFieldConfig validation."""

    def test_color_mode(self):
        """Test that only known color modes are accepted."""
        StarFieldConfig(color_mode="multi").validate()

        with pytest.raises(ConfigError, match="color_mode"):
            StarFieldConfig(color_mode="rainbow").validate()

    def test_empty_palette(self):
        """Test that an empty palette is rejected."""
        with pytest.raises(ConfigError, match="colors"):
            StarFieldConfig(colors=()).validate()

    def test_zero_stars_allowed(self):
        """Test that an empty field is a valid configuration."""
        StarFieldConfig(star_count=0).validate()

    def test_zero_speed_rejected(self):
        """Test that stars must keep approaching the viewer."""
        with pytest.raises(ConfigError, match="speed"):
            StarFieldConfig(speed=0.0).validate()


class TestFieldTypes:
    """Tests for type checking of configuration values."""

    def test_int_accepted_for_float(self):
        """Test that an integer is a valid value for a float option."""
        ShipConfig(speed=3, size=10).validate()

    @pytest.mark.parametrize("option, value", [
        ("count", 2.5),
        ("count", True),
        ("tail_length", 10.0),
        ("stuck_threshold", "30"),
        ("follow_index", 1.0),
        ("speed", "3"),
        ("follow_enabled", 1),
        ("color", 0xffffff),
    ])
    def test_ship_option_types(self, option, value):
        """Test that a ship option of the wrong type is a ConfigError."""
        with pytest.raises(ConfigError, match=f"ships.{option} must be"):
            ShipConfig(**{option: value}).validate()

    def test_star_option_types(self):
        """Test that star options of the wrong type are a ConfigError."""
        with pytest.raises(ConfigError, match="stars.star_count must be an integer"):
            StarFieldConfig(star_count=100.0).validate()

        with pytest.raises(ConfigError, match="stars.colors must be a list of strings"):
            StarFieldConfig(colors=("#fff", 255)).validate()

    def test_scene_option_types(self):
        """Test that top-level options of the wrong type are a ConfigError."""
        with pytest.raises(ConfigError, match="seed must be an integer or null"):
            SceneConfig.from_dict({"seed": "abc"})

        with pytest.raises(ConfigError, match="show_overlay must be a boolean"):
            SceneConfig.from_dict({"show_overlay": "yes"})

    def test_top_level_must_be_mapping(self):
        """Test that a config file holding a list is rejected."""
        with pytest.raises(ConfigError, match="mapping"):
            SceneConfig.from_dict([1, 2])


class TestSceneConfig:
    """Tests for SceneConfig construction and serialization."""

    def test_from_dict_nested(self):
        """Test building a config from nested sections."""
        config = SceneConfig.from_dict({
            "seed": 7,
            "stars": {"star_count": 50, "colors": ["#fff", "#ff0000"]},
            "ships": {"count": 3, "placement": "fan"},
        })

        assert config.seed == 7
        assert config.stars.star_count == 50
        assert config.stars.colors == ("#fff", "#ff0000")
        assert config.ships.count == 3
        assert config.ships.placement == "fan"

    def test_from_dict_unknown_key(self):
        """Test that unknown options are reported."""
        with pytest.raises(ConfigError, match="warp_factor"):
            SceneConfig.from_dict({"ships": {"warp_factor": 9}})

        with pytest.raises(ConfigError, match="gravity"):
            SceneConfig.from_dict({"gravity": 1})

    def test_from_dict_validates(self):
        """Test that from_dict validates the result."""
        with pytest.raises(ConfigError, match="fps_max"):
            SceneConfig.from_dict({"fps_max": 0})

    def test_section_must_be_mapping(self):
        """Test that a non-mapping section is rejected."""
        with pytest.raises(ConfigError, match="mapping"):
            SceneConfig.from_dict({"ships": [1, 2]})

    def test_to_dict_round_trip(self):
        """Test that to_dict output rebuilds the same config."""
        config = SceneConfig(seed=3, ships=ShipConfig(count=2, follow_index=1))

        data = json.loads(json.dumps(config.to_dict()))

        assert SceneConfig.from_dict(data) == config


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_load_json(self, tmp_path):
        """Test loading a JSON config file."""
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"background": "#101020", "ships": {"count": 8}}))

        config = load_config(path)

        assert config.background == "#101020"
        assert config.ships.count == 8

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises ConfigError."""
        path = tmp_path / "broken.json"
        path.write_text("{ships: ")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_string_speed(self, tmp_path):
        """Test that a quoted number in a file is reported as a config error."""
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"ships": {"speed": "3"}}))

        with pytest.raises(ConfigError, match="ships.speed must be a number"):
            load_config(path)

    def test_fractional_count(self, tmp_path):
        """Test that a fractional ship count in a file is reported as a config error."""
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"ships": {"count": 2.5}}))

        with pytest.raises(ConfigError, match="ships.count must be an integer"):
            load_config(path)


class TestCanvasSize:
    """Tests for canvas size validation."""

    def test_positive_size(self):
        """Test that a positive size passes."""
        validate_canvas_size(1, 1)

    @pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 10)])
    def test_rejects_non_positive(self, width, height):
        """Test that zero or negative sizes are rejected."""
        with pytest.raises(ConfigError):
            validate_canvas_size(width, height)
