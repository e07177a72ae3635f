"""
Тесты для модуля config_loader.py
"""

import pytest
from pathlib import Path

from photosort.config_loader import (
    ConfigLoader, Config, SorterConfig, LoggingConfig,
    load_config, default_config, validate_config
)


SETTINGS_PATH = Path(__file__).resolve().parent.parent / "config" / "settings.ini"


class TestConfigLoader:
    """Тесты для класса ConfigLoader."""

    @pytest.fixture
    def write_config(self, tmp_path):
        """Записывает временный файл конфигурации."""
        def _write(text: str) -> str:
            path = tmp_path / "settings.ini"
            path.write_text(text, encoding='utf-8')
            return str(path)
        return _write

    def test_load_shipped_config(self):
        """Тест загрузки поставляемого файла настроек."""
        config = load_config(str(SETTINGS_PATH))

        assert config.sorter.suffix == ".JPG"
        assert config.sorter.dry_run is False
        assert config.logging.level == "INFO"
        assert config.logging.log_file is None
        assert config.logging.max_log_size == 10
        assert config.logging.backup_count == 5

    def test_directories_not_configurable(self):
        """Каталоги задаются только в командной строке."""
        assert "[paths]" not in SETTINGS_PATH.read_text(encoding='utf-8')
        assert not hasattr(load_config(str(SETTINGS_PATH)), 'paths')

    def test_config_file_not_found(self, tmp_path):
        """Тест ошибки при отсутствии файла конфигурации."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nonexistent_config.ini"))

    def test_missing_sections_use_defaults(self, write_config):
        """Тест значений по умолчанию при отсутствии секций."""
        config = load_config(write_config("[other]\nkey=value\n"))

        assert config.sorter.suffix == ".JPG"
        assert config.logging.level == "INFO"

    def test_full_config(self, write_config):
        """Тест загрузки всех секций."""
        config = load_config(write_config("""[sorter]
suffix = .jpg
dry_run = true

[logging]
level = DEBUG
log_file = logs/photosort.log
max_log_size = 2
backup_count = 1
"""))

        assert config.sorter.suffix == ".jpg"
        assert config.sorter.dry_run is True
        assert config.logging.level == "DEBUG"
        assert config.logging.log_file == Path("logs/photosort.log")
        assert config.logging.max_log_size == 2
        assert config.logging.backup_count == 1

    def test_empty_suffix_disables_filter(self, write_config):
        """Тест отключения фильтра пустым суффиксом."""
        config = load_config(write_config("[sorter]\nsuffix =\n"))
        assert config.sorter.suffix is None

    def test_invalid_log_level(self, write_config):
        """Тест валидации некорректного уровня логирования."""
        with pytest.raises(ValueError, match="Некорректный уровень логирования"):
            load_config(write_config("[logging]\nlevel = INVALID_LEVEL\n"))

    def test_invalid_log_size(self, write_config):
        """Тест валидации размера лог-файла."""
        with pytest.raises(ValueError, match="Размер лог-файла должен быть больше 0"):
            load_config(write_config("[logging]\nmax_log_size = 0\n"))

    def test_invalid_boolean(self, write_config):
        """Тест ошибки разбора логического значения."""
        with pytest.raises(ValueError, match="Ошибка загрузки конфигурации"):
            load_config(write_config("[sorter]\ndry_run = maybe\n"))

    def test_reload_config(self):
        """Тест перезагрузки конфигурации."""
        loader = ConfigLoader(str(SETTINGS_PATH))
        config1 = loader.load_config()
        config2 = loader.reload_config()

        assert config1.sorter.suffix == config2.sorter.suffix
        assert config1.logging.level == config2.logging.level

    def test_get_config_without_load(self):
        """Тест получения конфигурации без предварительной загрузки."""
        loader = ConfigLoader(str(SETTINGS_PATH))

        with pytest.raises(ValueError, match="Конфигурация не загружена"):
            loader.get_config()


class TestDefaultConfig:
    """Тесты конфигурации по умолчанию и валидации."""

    def test_default_config(self):
        config = default_config()

        assert isinstance(config, Config)
        assert config.sorter.suffix == ".JPG"
        assert config.logging.log_file is None

    def test_default_configs_are_independent(self):
        first = default_config()
        first.sorter.suffix = ".png"

        assert default_config().sorter.suffix == ".JPG"

    def test_validate_empty_suffix(self):
        config = Config(sorter=SorterConfig(suffix=""))

        with pytest.raises(ValueError, match="Суффикс"):
            validate_config(config)

    def test_validate_negative_backup_count(self):
        config = Config(logging=LoggingConfig(backup_count=-1))

        with pytest.raises(ValueError, match="не может быть отрицательным"):
            validate_config(config)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
