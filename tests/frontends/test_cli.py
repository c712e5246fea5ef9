"""Tests for the CLI frontend."""

import argparse
import itertools
import logging
from io import StringIO
from unittest.mock import patch

from lifegrid.core.grid import Grid
from lifegrid.frontends.cli import (
    CLEAR_SCREEN,
    CLIGameOfLife,
    create_parser,
    load_seed_file,
    main,
    validate_args,
)

GLIDER = """
- - # - -
# - # - -
- # # - -
"""


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_create_grid_from_pattern(self):
        cli = CLIGameOfLife(out=StringIO())
        grid = cli.create_grid(8, 8, seed_text=GLIDER)

        assert grid.shape == (8, 8)
        assert grid.population == 5
        assert grid.is_alive(2, 0)

    def test_create_grid_random_is_reproducible(self):
        cli = CLIGameOfLife(out=StringIO())
        first = cli.create_grid(12, 10, population_rate=0.4, random_seed=9)
        second = cli.create_grid(12, 10, population_rate=0.4, random_seed=9)

        assert first == second
        assert first.population > 0

    def test_run_simulation_output(self):
        out = StringIO()
        cli = CLIGameOfLife(out=out, clear_screen=False)
        grid = cli.create_grid(8, 8, seed_text=GLIDER)

        game = cli.run_simulation(grid, max_generations=4, delay_ms=0)

        assert game.generation == 4
        output = out.getvalue()
        for generation in range(5):
            assert f"Generation: {generation}  Population: 5" in output
        assert CLEAR_SCREEN not in output

    def test_run_simulation_clears_screen(self):
        out = StringIO()
        cli = CLIGameOfLife(out=out, clear_screen=True)

        cli.run_simulation(Grid(3, 3), max_generations=2, delay_ms=0)

        assert out.getvalue().count(CLEAR_SCREEN) == 3

    def test_run_simulation_sleeps_remaining_frame_time(self):
        cli = CLIGameOfLife(out=StringIO(), clear_screen=False)

        with patch("lifegrid.frontends.cli.time.sleep") as mock_sleep:
            cli.run_simulation(Grid(4, 4), max_generations=3, delay_ms=50)

        assert mock_sleep.call_count == 3
        for call in mock_sleep.call_args_list:
            assert 0 < call.args[0] <= 0.05

    def test_run_simulation_warns_when_too_slow(self, caplog):
        cli = CLIGameOfLife(out=StringIO(), clear_screen=False)

        with patch("lifegrid.frontends.cli.time.perf_counter", side_effect=itertools.count(0.0, 1.0)), \
                patch("lifegrid.frontends.cli.time.sleep") as mock_sleep, \
                caplog.at_level(logging.WARNING, logger="lifegrid.frontends.cli"):
            cli.run_simulation(Grid(4, 4), max_generations=1, delay_ms=50)

        mock_sleep.assert_not_called()
        assert "simulation too slow" in caplog.text

    def test_format_frame(self):
        cli = CLIGameOfLife(out=StringIO())
        grid = Grid(3, 2)
        grid.birth(1, 0)
        game = cli.run_simulation(grid, max_generations=1, delay_ms=0)

        frame = cli.format_frame(game)
        assert frame.endswith("Generation: 1  Population: 0  Changed: 1")
        assert frame.startswith("- - -\n- - -")


class TestParser:
    """Test cases for argument parsing and validation."""

    def test_create_parser_defaults(self):
        """Test argument parser creation."""
        parser = create_parser()
        args = parser.parse_args([])

        assert args.width == 40
        assert args.height == 30
        assert args.seed is None
        assert args.population == 0.5
        assert args.random_seed is None
        assert args.generations == 0
        assert args.delay == 50.0
        assert args.no_clear is False
        assert args.verbose is False

    def test_parser_with_arguments(self):
        parser = create_parser()
        args = parser.parse_args(
            ["-W", "20", "-H", "10", "-s", "seed.txt", "-p", "0.3", "--random-seed", "4",
             "-g", "100", "-d", "10", "--no-clear", "-v"]
        )

        assert args.width == 20
        assert args.height == 10
        assert args.seed == "seed.txt"
        assert args.population == 0.3
        assert args.random_seed == 4
        assert args.generations == 100
        assert args.delay == 10.0
        assert args.no_clear is True
        assert args.verbose is True

    def test_validate_args_valid(self):
        args = create_parser().parse_args([])
        assert validate_args(args) is True

    def test_validate_args_invalid(self):
        """Test argument validation with invalid values."""
        args = argparse.Namespace(width=0, height=-1, population=1.5, generations=-1, delay=-5)

        with patch("builtins.print") as mock_print:
            assert validate_args(args) is False

        printed = " ".join(str(call.args[0]) for call in mock_print.call_args_list)
        assert "Width must be positive" in printed
        assert "Height must be positive" in printed
        assert "Population rate must be between 0.0 and 1.0" in printed
        assert "Generations must be non-negative" in printed
        assert "Delay must be non-negative" in printed


class TestMain:
    """Test cases for the main entry point."""

    def test_load_seed_file(self, tmp_path):
        seed = tmp_path / "glider.txt"
        seed.write_text(GLIDER)
        assert load_seed_file(str(seed)) == GLIDER

    def test_main_with_seed_file(self, tmp_path, capsys):
        seed = tmp_path / "glider.txt"
        seed.write_text(GLIDER)

        exit_code = main(["-W", "8", "-H", "8", "-s", str(seed), "-g", "4", "-d", "0", "--no-clear"])

        assert exit_code == 0
        output = capsys.readouterr().out
        assert "Generation: 4  Population: 5" in output

    def test_main_random(self, capsys):
        exit_code = main(["-W", "6", "-H", "5", "--random-seed", "1", "-g", "2", "-d", "0", "--no-clear"])

        assert exit_code == 0
        assert "Generation: 2" in capsys.readouterr().out

    def test_main_invalid_args(self, capsys):
        assert main(["-W", "0"]) == 1
        assert "Width must be positive" in capsys.readouterr().out

    def test_main_missing_seed_file(self, tmp_path, capsys):
        exit_code = main(["-s", str(tmp_path / "missing.txt"), "-g", "1", "-d", "0"])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().out

    def test_main_seed_file_not_utf8(self, tmp_path, capsys):
        seed = tmp_path / "latin.txt"
        seed.write_bytes(b"\xff\xfe # -")

        exit_code = main(["-W", "5", "-H", "5", "-s", str(seed), "-g", "1", "-d", "0"])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().out

    def test_main_pattern_too_large(self, tmp_path, capsys):
        seed = tmp_path / "wide.txt"
        seed.write_text("# # # # #")

        exit_code = main(["-W", "3", "-H", "3", "-s", str(seed), "-g", "1", "-d", "0"])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().out

    def test_main_keyboard_interrupt(self, capsys):
        with patch.object(CLIGameOfLife, "run_simulation", side_effect=KeyboardInterrupt):
            exit_code = main(["-W", "5", "-H", "5", "-d", "0"])

        assert exit_code == 1
        assert "Simulation interrupted by user" in capsys.readouterr().out
