"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с цветным выводом
в консоль, необязательной ротацией лог-файла и отчетом о каждом
запланированном перемещении.
"""

import logging
import logging.handlers
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'photosort'
REPORT_LOGGER_NAME = 'photosort.report'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Копия записи: файловый обработчик должен получить уровень без ANSI-кодов
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


class PhotoSortLogger:
    """Класс для управления логированием приложения photosort."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self.report_logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """
        Настраивает логгер с консольным и, при необходимости, файловым выводом.

        Отчет о запланированных перемещениях идет через отдельный логгер
        с уровнем INFO, поэтому он выводится при любом уровне из конфигурации.
        """
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        self.report_logger = logging.getLogger(REPORT_LOGGER_NAME)
        self.report_logger.setLevel(logging.INFO)

        # Очищаем существующие обработчики
        for logger in (self.logger, self.report_logger):
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

        formatter = logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        colored_formatter = ColoredFormatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(colored_formatter)
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        report_handler = logging.StreamHandler(sys.stdout)
        report_handler.setFormatter(colored_formatter)
        report_handler.setLevel(logging.INFO)
        self.report_logger.addHandler(report_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            # Настраиваем файловый обработчик с ротацией
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # Конвертируем MB в байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            # Уровень основного логгера фильтрует записи раньше обработчика
            file_handler.setLevel(min(level, logging.INFO))
            self.logger.addHandler(file_handler)
            self.report_logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False
        self.report_logger.propagate = False

    def close(self) -> None:
        """Закрывает обработчики логгера (в том числе лог-файл)."""
        for logger in (self.logger, self.report_logger):
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

    def log_sort_start(self, total_files: int, input_root: Path, output_root: Path) -> None:
        """
        Логирует начало сортировки.

        Args:
            total_files: Количество найденных файлов
            input_root: Исходный каталог
            output_root: Целевой каталог
        """
        self.logger.info(f"🚀 Начало сортировки: {input_root} → {output_root}")
        self.logger.info(f"📊 Найдено файлов: {total_files}")
        self.logger.info(f"⏰ Время начала: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_sort_end(self, processed: int, moved: int, copied: int, skipped: int, planned: int) -> None:
        """
        Логирует завершение сортировки.

        Args:
            processed: Обработано файлов
            moved: Перемещено переименованием
            copied: Скопировано с удалением исходника
            skipped: Пропущено (файл уже существует)
            planned: Запланировано в пробном режиме
        """
        self.logger.info("✅ Сортировка завершена")
        self.logger.info("📊 Статистика:")
        self.logger.info(f"   • Обработано: {processed}")
        self.logger.info(f"   • Перемещено: {moved}")
        self.logger.info(f"   • Скопировано: {copied}")
        self.logger.info(f"   • Пропущено: {skipped}")
        if planned:
            self.logger.info(f"   • Запланировано (пробный запуск): {planned}")

    def log_planned(self, source: Path, target_date: date, target: Path) -> None:
        """
        Логирует запланированное перемещение файла.

        Args:
            source: Исходный путь
            target_date: Дата файла
            target: Целевой путь
        """
        self.report_logger.info(f"📋 Файл: {source} дата: {target_date.isoformat()} цель: {target}")

    def log_skipped(self, target: Path) -> None:
        """Логирует пропуск файла, который уже есть в целевом каталоге."""
        self.report_logger.info(f"⏭️ {target} пропущен: файл уже существует")

    def log_file_moved(self, source: Path, target: Path) -> None:
        """
        Логирует успешное перемещение файла.

        Args:
            source: Исходный путь
            target: Целевой путь
        """
        self.logger.info(f"📁 Файл перемещен: {source} → {target}")

    def log_copy_fallback(self, source: Path, target: Path, error: Exception) -> None:
        """
        Логирует переход на копирование после неудачного переименования.

        Args:
            source: Исходный путь
            target: Целевой путь
            error: Ошибка переименования
        """
        self.logger.warning(f"🔁 Переименование {source} → {target} не удалось ({error}), копируем")

    def log_directory_created(self, path: Path) -> None:
        """Логирует создание каталога даты."""
        self.logger.debug(f"📂 Создан каталог: {path}")

    def log_directory_reused(self, path: Path) -> None:
        """Логирует повторное использование существующего каталога даты."""
        self.logger.debug(f"📂 Используется существующий каталог: {path}")

    def log_dry_run(self) -> None:
        """Логирует включение пробного режима."""
        self.logger.info("ℹ️ Пробный запуск. Файлы и каталоги не изменяются.")

    def log_file_error(self, path: Path, error: Exception) -> None:
        """
        Логирует ошибку при обработке файла.

        Args:
            path: Путь к файлу
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при обработке файла {path}: {error}")

    def log_system_info(self, info: str) -> None:
        """
        Логирует системную информацию.

        Args:
            info: Информационное сообщение
        """
        self.logger.info(f"ℹ️ {info}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")

