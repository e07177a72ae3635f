"""
Тесты для модуля main.py
"""

import os
import logging
import pytest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock, patch

from photosort.main import PhotoSortCLI, create_parser, main
from photosort.sorter import SortError, SortStats


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    for name in ('photosort', 'photosort.report'):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)


def make_photo(path: Path, year: int, month: int, day: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(path.name.encode())
    ts = datetime(year, month, day, 10, tzinfo=timezone.utc).timestamp()
    os.utime(path, (ts, ts))
    return path


class TestCreateParser:
    """Тесты парсера аргументов."""

    def test_positional_arguments(self):
        args = create_parser().parse_args(["in", "out"])

        assert args.input == "in"
        assert args.output == "out"
        assert args.dry_run is False
        assert args.config is None
        assert args.suffix is None

    def test_dry_run_flags(self):
        parser = create_parser()

        assert parser.parse_args(["in", "out", "-d"]).dry_run is True
        assert parser.parse_args(["in", "out", "--dry-run"]).dry_run is True

    def test_missing_output(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["in"])


class TestPhotoSortCLI:
    """Тесты для класса PhotoSortCLI."""

    def test_setup_defaults(self, tmp_path):
        args = create_parser().parse_args([str(tmp_path), str(tmp_path / "out")])
        cli = PhotoSortCLI()

        assert cli.setup(args) is True
        assert cli.config.sorter.suffix == ".JPG"
        assert cli.sorter.output_root == tmp_path / "out"

    def test_setup_suffix_and_verbose(self, tmp_path):
        args = create_parser().parse_args([str(tmp_path), str(tmp_path), "--suffix", "", "-v"])
        cli = PhotoSortCLI()

        assert cli.setup(args) is True
        assert cli.config.sorter.suffix is None
        assert cli.config.logging.level == 'DEBUG'

    def test_setup_missing_config(self, tmp_path, capsys):
        args = create_parser().parse_args([str(tmp_path), str(tmp_path), "--config", str(tmp_path / "none.ini")])
        cli = PhotoSortCLI()

        assert cli.setup(args) is False
        assert "Ошибка инициализации" in capsys.readouterr().out

    def test_cmd_sort_error(self, tmp_path, capsys):
        args = create_parser().parse_args([str(tmp_path), str(tmp_path)])
        cli = PhotoSortCLI()
        cli.config = Mock()
        cli.config.sorter.dry_run = False
        cli.sorter = Mock()
        cli.sorter.run.side_effect = SortError("boom")

        assert cli.cmd_sort(args) == 1
        assert "boom" in capsys.readouterr().out

    def test_cmd_sort_success(self, tmp_path, capsys):
        args = create_parser().parse_args([str(tmp_path), str(tmp_path), "-d"])
        stats = SortStats()
        stats.planned_files = 4
        cli = PhotoSortCLI()
        cli.config = Mock()
        cli.sorter = Mock()
        cli.sorter.run.return_value = stats

        assert cli.cmd_sort(args) == 0
        cli.sorter.run.assert_called_once_with(str(tmp_path), dry_run=True)
        assert "запланировано 4" in capsys.readouterr().out


class TestMain:
    """Сквозные тесты CLI."""

    def test_main_sorts_files(self, tmp_path):
        source = tmp_path / "camera"
        output = tmp_path / "photos"
        make_photo(source / "IMG_001.JPG", 2024, 3, 10)
        make_photo(source / "IMG_002.JPG", 2024, 3, 10)

        assert main([str(source), str(output)]) == 0

        day = output / "2024" / "2024-03-10"
        assert sorted(p.name for p in day.iterdir()) == ["IMG_001.JPG", "IMG_002.JPG"]
        assert [p.name for p in output.iterdir()] == ["2024"]

        assert main([str(source), str(output)]) == 0
        assert sorted(p.name for p in day.iterdir()) == ["IMG_001.JPG", "IMG_002.JPG"]

    def test_main_dry_run(self, tmp_path, capsys):
        source = tmp_path / "camera"
        output = tmp_path / "photos"
        make_photo(source / "IMG_001.JPG", 2024, 3, 10)

        assert main([str(source), str(output), "--dry-run"]) == 0

        out = capsys.readouterr().out
        assert "IMG_001.JPG" in out
        assert "2024-03-10" in out
        assert (source / "IMG_001.JPG").exists()
        assert not output.exists()

    def test_main_dry_run_reports_with_warning_level(self, tmp_path, capsys):
        """План выводится, даже если в конфигурации уровень WARNING."""
        source = tmp_path / "camera"
        output = tmp_path / "photos"
        make_photo(source / "IMG_001.JPG", 2024, 3, 10)
        config = tmp_path / "settings.ini"
        config.write_text("[logging]\nlevel = WARNING\n", encoding='utf-8')

        assert main([str(source), str(output), "--dry-run", "--config", str(config)]) == 0

        out = capsys.readouterr().out
        assert "IMG_001.JPG" in out
        assert "2024-03-10" in out
        assert "Начало сортировки" not in out
        assert not output.exists()

    def test_main_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing"), str(tmp_path / "out")]) == 1
        assert "Ошибка сортировки" in capsys.readouterr().out

    def test_main_interrupted(self, tmp_path, capsys):
        with patch('photosort.main.PhotoSortCLI.cmd_sort', side_effect=KeyboardInterrupt):
            assert main([str(tmp_path), str(tmp_path)]) == 1

        assert "прервана" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
