"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров из INI-файла (например, config/settings.ini)
с валидацией и удобным доступом к настройкам. Без файла используется
конфигурация по умолчанию.
"""

import configparser
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field


DEFAULT_SUFFIX = ".JPG"


@dataclass
class SorterConfig:
    """Конфигурация параметров сортировки."""
    suffix: Optional[str] = DEFAULT_SUFFIX
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = "INFO"
    log_file: Optional[Path] = None
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    sorter: SorterConfig = field(default_factory=SorterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: str = "config/settings.ini"):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser()
        config_parser.read(self.config_path, encoding='utf-8')

        try:
            self._config = Config(
                sorter=self._load_sorter_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )
            self._validate_config()
            return self._config

        except (configparser.Error, ValueError) as e:
            self._config = None
            raise ValueError(f"Ошибка загрузки конфигурации: {e}")

    def _load_sorter_config(self, parser: configparser.ConfigParser) -> SorterConfig:
        """Загружает конфигурацию сортировки."""
        section = 'sorter'

        if not parser.has_section(section):
            return SorterConfig()

        suffix = parser.get(section, 'suffix', fallback=DEFAULT_SUFFIX).strip()

        return SorterConfig(
            suffix=suffix or None,
            dry_run=parser.getboolean(section, 'dry_run', fallback=False)
        )

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            return LoggingConfig()

        log_file = parser.get(section, 'log_file', fallback='').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        validate_config(self._config)

    def get_config(self) -> Config:
        """
        Возвращает загруженную конфигурацию.

        Returns:
            Config: Объект конфигурации

        Raises:
            ValueError: Если конфигурация не загружена
        """
        if self._config is None:
            raise ValueError("Конфигурация не загружена. Вызовите load_config() сначала.")
        return self._config

    def reload_config(self) -> Config:
        """
        Перезагружает конфигурацию из файла.

        Returns:
            Config: Обновленный объект конфигурации
        """
        self._config = None
        return self.load_config()


def validate_config(config: Config) -> None:
    """
    Проверяет значения конфигурации.

    Raises:
        ValueError: Если значение некорректно
    """
    if config.sorter.suffix is not None and not config.sorter.suffix:
        raise ValueError("Суффикс файлов не может быть пустой строкой")

    if config.logging.max_log_size <= 0:
        raise ValueError("Размер лог-файла должен быть больше 0")

    if config.logging.backup_count < 0:
        raise ValueError("Количество архивов логов не может быть отрицательным")

    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config.logging.level.upper() not in valid_levels:
        raise ValueError(f"Некорректный уровень логирования: {config.logging.level}")


def default_config() -> Config:
    """Конфигурация по умолчанию, когда файл настроек не указан."""
    return Config()


def load_config(config_path: str = "config/settings.ini") -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


if __name__ == "__main__":
    # Тестирование модуля
    try:
        config = load_config()
        print("✅ Конфигурация успешно загружена!")
        print(f"🔎 Суффикс файлов: {config.sorter.suffix}")
        print(f"📝 Уровень логирования: {config.logging.level}")
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Ошибка загрузки конфигурации: {e}")
