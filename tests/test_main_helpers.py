import io
import logging

import structlog
import yaml

import main
from cavemap.config import GeneratorConfig
from cavemap.world.grid import BinaryGrid
from utils.logging_utils import build_processors, parse_log_level, stream_supports_color


def _write_config(tmp_path, **values):
    settings = dict(
        width=32,
        height=32,
        seed=4,
        region_amount=8,
        number_of_treasures=2,
        cross_size=1,
        step_delay=0,
        output_dir=str(tmp_path / "out"),
    )
    settings.update(values)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(settings), encoding="utf-8")
    return path


def test_cli_overrides_yaml(tmp_path):
    path = _write_config(tmp_path)
    args = main.build_arg_parser().parse_args(
        ["--config", str(path), "--width", "40", "--mode", "mode", "--show-steps"]
    )
    config = main.load_generator_config(args)
    assert isinstance(config, GeneratorConfig)
    assert config.width == 40
    assert config.height == 32
    assert config.use_mean_color is False
    assert config.show_intermediate_steps is True


def test_cli_keeps_yaml_when_flags_absent(tmp_path):
    path = _write_config(tmp_path, use_mean_color=False)
    args = main.build_arg_parser().parse_args(["--config", str(path)])
    config = main.load_generator_config(args)
    assert config.use_mean_color is False
    assert config.show_intermediate_steps is False


def test_step_printer_writes_ascii_frames():
    out = io.StringIO()
    printer = main.make_step_printer(0, out=out)
    printer(2, BinaryGrid.from_strings(["#.", ".#"]))
    assert "--- Step 2 ---" in out.getvalue()
    assert "#.\n.#" in out.getvalue()


def test_main_writes_three_images(tmp_path):
    path = _write_config(tmp_path)
    assert main.main(["--config", str(path)]) == main.EXIT_OK
    out_dir = tmp_path / "out"
    for name in ("CaveMap.png", "VoronoiMosaicResult.png", "CaveMosaicMap.png"):
        assert (out_dir / name).is_file()


def test_main_no_save_and_steps(tmp_path, capsys):
    path = _write_config(tmp_path, number_of_steps=2)
    assert main.main(["--config", str(path), "--no-save", "--show-steps"]) == main.EXIT_OK
    assert not (tmp_path / "out").exists()
    printed = capsys.readouterr().out
    assert "--- Step 1 ---" in printed
    assert "--- Step 2 ---" in printed


def test_main_bad_config_exit_code(tmp_path):
    path = _write_config(tmp_path, width=0)
    assert main.main(["--config", str(path)]) == main.EXIT_BAD_CONFIG
    assert main.main(["--config", str(tmp_path / "missing.yaml")]) == main.EXIT_BAD_CONFIG


def test_main_unexpected_error_exit_code(tmp_path, monkeypatch):
    path = _write_config(tmp_path)

    def explode(config, on_step=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(main, "generate_cave_mosaic", explode)
    assert main.main(["--config", str(path), "--no-save"]) == main.EXIT_FAILURE


def test_parse_log_level():
    assert parse_log_level("warning") == logging.WARNING
    assert parse_log_level("ERROR", verbose=True) == logging.DEBUG
    assert parse_log_level("nonsense") == logging.INFO


def test_colors_follow_the_terminal():
    assert stream_supports_color(io.StringIO()) is False

    class FakeTerminal(io.StringIO):
        def isatty(self):
            return True

    assert stream_supports_color(FakeTerminal()) is True


def test_debug_logging_records_call_site():
    debug_chain = build_processors(logging.DEBUG, colors=False)
    info_chain = build_processors(logging.INFO, colors=False)
    assert any(isinstance(p, structlog.processors.CallsiteParameterAdder) for p in debug_chain)
    assert not any(isinstance(p, structlog.processors.CallsiteParameterAdder) for p in info_chain)
    assert isinstance(debug_chain[-1], structlog.dev.ConsoleRenderer)


def test_no_color_flag_parses():
    args = main.build_arg_parser().parse_args(["--no-color", "-v"])
    assert args.no_color is True
    assert parse_log_level(args.log_level, args.verbose) == logging.DEBUG


def test_main_malformed_marker_color_is_a_config_error(tmp_path):
    path = _write_config(tmp_path, marker_color=5)
    assert main.main(["--config", str(path), "--no-save"]) == main.EXIT_BAD_CONFIG
