"""Tests for the command-line entry point and report output."""

import math

import orjson
import pytest

from app.__main__ import main, parse_args, resolve_params
from app.config import get_settings
from app.report import BandReportFormatter
from core.models.bands import BandPoint
from core.models.config import BollingerParams


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("BB_LENGTH", "BB_SOURCE", "BB_STD_DEV_MULTIPLIER", "BB_OFFSET"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_file(tmp_path):
    rows = [
        {
            "timestamp": 1704067200000 + i * 86_400_000,
            "open": 100.0 + i,
            "high": 101.0 + i,
            "low": 99.0 + i,
            "close": 100.0 + i,
            "volume": 10.0,
        }
        for i in range(10)
    ]
    path = tmp_path / "ohlcv.json"
    path.write_bytes(orjson.dumps(rows))
    return path


def base_args(tmp_path, data_file, *extra):
    return ["--data", str(data_file), "--config", str(tmp_path / "none.yaml"), *extra]


class TestResolveParams:
    def test_overrides_only_given_values(self):
        args = parse_args(["--length", "5", "--mult", "1.5"])
        params = resolve_params(args, BollingerParams(offset=3))
        assert params.length == 5
        assert params.std_dev_multiplier == 1.5
        assert params.offset == 3
        assert params.source == "close"

    def test_invalid_override_rejected(self):
        args = parse_args(["--mult", "-1"])
        with pytest.raises(ValueError):
            resolve_params(args, BollingerParams())


class TestMain:
    def test_json_output(self, tmp_path, data_file, capsys):
        code = main(base_args(tmp_path, data_file, "--length", "3", "--json", "--tail", "0"))
        assert code == 0

        lines = capsys.readouterr().out.strip().splitlines()
        rows = [orjson.loads(line) for line in lines]
        assert len(rows) == 10
        assert rows[0]["basis"] is None
        assert rows[1]["upper"] is None
        assert rows[2]["basis"] == pytest.approx(101.0)
        assert rows[2]["upper"] == pytest.approx(103.0)
        assert rows[2]["lower"] == pytest.approx(99.0)

    def test_json_tail(self, tmp_path, data_file, capsys):
        code = main(base_args(tmp_path, data_file, "--length", "3", "--json", "--tail", "2"))
        assert code == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 2

    def test_table_output(self, tmp_path, data_file, capsys):
        code = main(base_args(tmp_path, data_file, "--length", "3"))
        assert code == 0
        out = capsys.readouterr().out
        assert "BOLLINGER BANDS" in out
        assert "SMA(3, 2)" in out
        assert "Bars:     10" in out
        assert "Defined:  8" in out

    def test_env_file_next_to_config(self, tmp_path, data_file, capsys, monkeypatch):
        """BB_* values in the .env beside the config override cached settings."""
        get_settings()
        # Registered so teardown removes the value load_dotenv sets
        monkeypatch.setenv("BB_LENGTH", "20")
        monkeypatch.delenv("BB_LENGTH")
        (tmp_path / ".env").write_text("BB_LENGTH=3\n")

        code = main(base_args(tmp_path, data_file, "--json", "--tail", "0"))
        assert code == 0

        rows = [orjson.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert rows[1]["basis"] is None
        assert rows[2]["basis"] == pytest.approx(101.0)

    def test_defaults_work_from_any_directory(self, tmp_path, capsys, monkeypatch):
        """Bundled sample data and config are found without arguments."""
        monkeypatch.chdir(tmp_path)
        code = main(["--json", "--tail", "1"])
        assert code == 0
        row = orjson.loads(capsys.readouterr().out.strip())
        assert row["basis"] is not None

    def test_invalid_params_exit_2(self, tmp_path, data_file, capsys):
        code = main(base_args(tmp_path, data_file, "--length", "0"))
        assert code == 2
        assert "Error" in capsys.readouterr().err

    def test_missing_data_exit_1(self, tmp_path, capsys):
        code = main(
            ["--data", str(tmp_path / "missing.json"), "--config", str(tmp_path / "none.yaml")]
        )
        assert code == 1
        assert "file not found" in capsys.readouterr().err


class TestBandReportFormatter:
    def test_json_lines(self):
        points = [
            BandPoint(timestamp=1, basis=math.nan, upper=math.nan, lower=math.nan),
            BandPoint(timestamp=2, basis=0.0, upper=1.0, lower=-1.0),
        ]
        lines = BandReportFormatter.to_json_lines(points).splitlines()
        assert orjson.loads(lines[0]) == {
            "timestamp": 1, "basis": None, "upper": None, "lower": None
        }
        assert orjson.loads(lines[1])["basis"] == 0.0
