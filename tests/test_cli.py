"""Tests for the command-line tools."""

import pytest

from ouroboros.cli import _build_parser, greedy_direction, main
from ouroboros.config import GameConfig
from ouroboros.vector import Direction


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.ticks == 1_000
        assert args.grid_size == 15
        assert args.seed is None

    def test_play_flags(self):
        args = _build_parser().parse_args([
            "play", "--seconds", "2", "--grid-size", "11", "--speed", "12",
        ])
        assert args.seconds == 2.0
        assert args.grid_size == 11
        assert args.speed == 12.0
        assert args.config is None

    def test_config_args(self):
        args = _build_parser().parse_args(["config", "out.json", "--pause-after-death"])
        assert args.output == "out.json"
        assert args.pause_after_death is True


class TestGreedyDirection:
    def test_heads_for_target(self):
        state = {
            "grid_size": 7, "heading": "RIGHT",
            "body": [[1, 3], [2, 3], [3, 3]], "target": [3, 0],
        }
        assert greedy_direction(state) is Direction.UP

    def test_avoids_wall(self):
        state = {
            "grid_size": 7, "heading": "UP",
            "body": [[0, 2], [0, 1], [0, 0]], "target": [0, 6],
        }
        assert greedy_direction(state) is Direction.RIGHT

    def test_keeps_heading_when_trapped(self):
        state = {
            "grid_size": 5, "heading": "UP",
            "body": [[1, 0], [1, 1], [0, 1], [0, 0]], "target": [4, 4],
        }
        assert greedy_direction(state) is Direction.UP


class TestCLISimulate:
    def test_simulate_runs(self, capsys):
        assert main(["simulate", "--ticks", "300", "--grid-size", "9", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "Simulated: 300 ticks" in out
        assert "best length" in out

    def test_invalid_grid_size(self):
        assert main(["simulate", "--grid-size", "8"]) == 2


class TestCLIPlay:
    def test_short_game(self, capsys):
        result = main([
            "play", "--seconds", "0.3", "--grid-size", "9",
            "--speed", "30", "--seed", "1",
        ])
        assert result == 0
        assert "Played:" in capsys.readouterr().out

    def test_play_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "game.json"
        GameConfig(grid_size=7, ticks_per_second=20).save(path)
        assert main(["play", "--config", str(path), "--seconds", "0.2"]) == 0
        assert "Played:" in capsys.readouterr().out


class TestCLIConfig:
    def test_writes_config(self, tmp_path):
        path = tmp_path / "game.json"
        assert main([
            "config", str(path), "--grid-size", "21", "--speed", "10",
            "--pause-after-death",
        ]) == 0
        loaded = GameConfig.load(path)
        assert loaded.grid_size == 21
        assert loaded.ticks_per_second == 10
        assert loaded.pause_after_death is True

    def test_rejects_bad_speed(self, tmp_path):
        assert main(["config", str(tmp_path / "x.json"), "--speed", "0"]) == 2

    def test_unknown_command_exits(self):
        with pytest.raises(SystemExit):
            main(["explode"])
