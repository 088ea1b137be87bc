import json

import pytest

from config import PaletteConfig
from errors import ConfigError
from photo2palette import build_palette, main, parse_args


@pytest.fixture
def red_blue(write_image):
    return write_image([[(255, 0, 0), (0, 0, 255)]])


def test_main_code_output(red_blue, capsys):
    assert main(["--image", red_blue, "--steps", "2", "--name", "RB"]) == 0
    out, err = capsys.readouterr()
    assert '    name: "RB",' in out
    assert '            (0.00000, UIColor(hex: "#FF0000")),' in out
    assert '            (1.00000, UIColor(hex: "#0000FF"))' in out
    assert err == ""


def test_main_data_output(red_blue, capsys):
    assert main(["-i", red_blue, "-s", "2", "-n", "Test", "-f", "data"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "Test"
    assert [(s["r"], s["g"], s["b"], s["t"]) for s in data["stops"]] == [
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 1.0),
    ]


def test_main_json_alias(red_blue, capsys):
    assert main(["-i", red_blue, "-s", "2", "-f", "json"]) == 0
    assert json.loads(capsys.readouterr().out)["name"] == "Imported Palette"


def test_main_single_white_pixel(write_image, capsys):
    path = write_image([[(255, 255, 255)]])
    assert main(["-i", path, "-s", "5", "-v", "-f", "data"]) == 0
    stops = json.loads(capsys.readouterr().out)["stops"]
    assert [s["t"] for s in stops] == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert all((s["r"], s["g"], s["b"]) == (1.0, 1.0, 1.0) for s in stops)


def test_main_default_steps(red_blue, capsys):
    assert main(["-i", red_blue]) == 0
    out = capsys.readouterr().out
    assert out.count("UIColor(hex:") == 512


def test_main_zero_saturation_outputs_gray(red_blue, capsys):
    assert main(["-i", red_blue, "-s", "2", "--sat", "0", "-f", "data"]) == 0
    for stop in json.loads(capsys.readouterr().out)["stops"]:
        assert stop["r"] == stop["g"] == stop["b"]


def test_main_writes_output_file(red_blue, tmp_path, capsys):
    target = tmp_path / "palette.json"
    assert main(["-i", red_blue, "-s", "2", "-f", "data", "-o", str(target)]) == 0
    assert capsys.readouterr().out == ""
    assert len(json.loads(target.read_text())["stops"]) == 2


def test_main_unwritable_output(red_blue, tmp_path, capsys):
    target = tmp_path / "missing-dir" / "palette.json"
    assert main(["-i", red_blue, "-s", "2", "-o", str(target)]) == 1
    assert "Error writing output" in capsys.readouterr().err


def test_main_verbose_goes_to_stderr(red_blue, capsys):
    assert main(["-i", red_blue, "-s", "2", "--gamma", "2", "--verbose"]) == 0
    out, err = capsys.readouterr()
    assert "Loading:" in err
    assert "Adjusting (hsv)" in err
    assert "Loading:" not in out


def test_main_missing_image_argument(capsys):
    assert main([]) == 1
    out, err = capsys.readouterr()
    assert "Missing required --image" in err
    assert out == ""


def test_main_image_not_found(tmp_path, capsys):
    assert main(["-i", str(tmp_path / "nope.png")]) == 1
    assert "Image not found" in capsys.readouterr().err


def test_main_undecodable_image(tmp_path, capsys):
    path = tmp_path / "fake.png"
    path.write_text("not an image")
    assert main(["-i", str(path), "-s", "4"]) == 2
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error:")


@pytest.mark.parametrize("extra", [
    ["--steps", "1"],
    ["--gamma", "0"],
    ["--gamma", "-2"],
    ["--sat", "-1"],
    ["--gamma", "nan"],
    ["--mode", "hsl", "--stretch", "1.5"],
    ["--auto-stretch"],
])
def test_main_invalid_configuration(red_blue, capsys, extra):
    assert main(["-i", red_blue] + extra) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error:")


def test_parse_args_builds_config(red_blue):
    config = parse_args([
        "-i", red_blue, "-n", "Glow", "-s", "64", "-v", "-f", "data",
        "--mode", "hsl", "--sat", "1.2", "--gamma", "1.4", "--auto-stretch", "--no-resample",
    ])
    assert config == PaletteConfig(
        image_path=red_blue, name="Glow", steps=64, vertical=True, format="data",
        saturation=1.2, gamma=1.4, auto_stretch=True, mode="hsl", resample=False,
    )
    assert config.adjustment.mode == "hsl"
    assert config.adjustment.auto_stretch


def test_parse_args_rejects_conflicting_stretch(red_blue):
    with pytest.raises(ConfigError):
        parse_args(["-i", red_blue, "--mode", "hsl", "--stretch", "2"])


def test_build_palette_hsl_auto_stretch(write_image):
    path = write_image([[(51, 102, 153), (51, 102, 153)]])
    config = PaletteConfig(image_path=path, steps=2, mode="hsl", auto_stretch=True).validate()
    palette = build_palette(config)
    for stop in palette.stops:
        r, g, b = stop.color.to_bytes()
        assert (r, b) == (0, 255)
        assert g in (127, 128)


def test_build_palette_resamples_small_images(write_image):
    path = write_image([[(0, 0, 0), (255, 255, 255)]])
    palette = build_palette(PaletteConfig(image_path=path, steps=16).validate())
    values = [s.color.r for s in palette.stops]
    assert len(values) == 16
    assert values == sorted(values)
    assert len(set(values)) > 2


@pytest.mark.parametrize("extra", [
    ["--steps", "abc"],
    ["--gamma", "bright"],
    ["--format", "yaml"],
    ["--unknown-flag"],
])
def test_main_malformed_arguments_exit_one(red_blue, capsys, extra):
    assert main(["-i", red_blue] + extra) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error:")


def test_parse_args_malformed_steps_raises_config_error(red_blue):
    with pytest.raises(ConfigError, match="--steps"):
        parse_args(["-i", red_blue, "--steps", "abc"])


def test_main_oversized_resize_exits_two(write_image, capsys):
    path = write_image([[(255, 0, 0)] * 4])
    assert main(["-i", path, "--steps", "20000"]) == 2
    out, err = capsys.readouterr()
    assert out == ""
    assert "exceed" in err
