"""
Модуль бизнес-логики сортировки фотографий.

Объединяет поиск файлов, определение даты и каталога назначения
и перемещение файлов в структуру <YYYY>/<YYYY-MM-DD>.
"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

try:
    from .config_loader import Config
    from .logger import PhotoSortLogger
    from .resolver import DestinationResolver
    from .file_ops import (
        FileEntry, FileOperationError, MOVED, COPIED,
        list_files, parse_files, move_file
    )
except ImportError:
    from config_loader import Config
    from logger import PhotoSortLogger
    from resolver import DestinationResolver
    from file_ops import (
        FileEntry, FileOperationError, MOVED, COPIED,
        list_files, parse_files, move_file
    )


SKIPPED = "skipped"
PLANNED = "planned"


class SortError(Exception):
    """Исключение для ошибок сортировки."""
    pass


@dataclass(frozen=True)
class RelocationOutcome:
    """Результат обработки одного файла."""
    source: Path
    target_date: date
    target: Path
    status: str


class SortStats:
    """Класс для хранения статистики сортировки."""

    def __init__(self):
        self.total_files = 0
        self.processed_files = 0
        self.moved_files = 0
        self.copied_files = 0
        self.skipped_files = 0
        self.planned_files = 0
        self.directories_created = 0
        self.start_time = None
        self.end_time = None

    def add_outcome(self, outcome: RelocationOutcome) -> None:
        """Учитывает результат обработки файла."""
        self.processed_files += 1
        if outcome.status == MOVED:
            self.moved_files += 1
        elif outcome.status == COPIED:
            self.copied_files += 1
        elif outcome.status == SKIPPED:
            self.skipped_files += 1
        elif outcome.status == PLANNED:
            self.planned_files += 1

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность сортировки в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict:
        """Преобразует статистику в словарь."""
        return {
            'total_files': self.total_files,
            'processed_files': self.processed_files,
            'moved_files': self.moved_files,
            'copied_files': self.copied_files,
            'skipped_files': self.skipped_files,
            'planned_files': self.planned_files,
            'directories_created': self.directories_created,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration()
        }


class Sorter:
    """Основной класс для сортировки файлов по датам."""

    def __init__(self, config: Config, logger: PhotoSortLogger, output_root: Union[str, Path]):
        """
        Инициализация сортировщика.

        Args:
            config: Конфигурация приложения
            logger: Логгер для записи операций
            output_root: Целевой каталог
        """
        self.config = config
        self.logger = logger

        self.output_root = Path(output_root)
        self.resolver = DestinationResolver(self.output_root, logger)
        self.stats = SortStats()
        self.outcomes: List[RelocationOutcome] = []

    def collect(self, input_root: Union[str, Path]) -> List[FileEntry]:
        """
        Находит файлы для сортировки и определяет их даты.

        Args:
            input_root: Исходный каталог

        Returns:
            List[FileEntry]: Файлы с датами в порядке обхода
        """
        paths = list_files(input_root, self.config.sorter.suffix)
        return parse_files(p for p in paths if p.is_file())

    def relocate(self, entry: FileEntry, dry_run: bool = False) -> RelocationOutcome:
        """
        Размещает один файл в каталоге его даты.

        Запланированное перемещение сообщается всегда, до любых изменений.
        Существующий файл с тем же именем не перезаписывается.

        Args:
            entry: Файл и его дата
            dry_run: Только сообщить о плане

        Returns:
            RelocationOutcome: Результат обработки файла
        """
        directory = self.resolver.resolve(entry.target_date, dry_run)
        target = directory / entry.source.name

        self.logger.log_planned(entry.source, entry.target_date, target)

        if target.exists():
            self.logger.log_skipped(target)
            return RelocationOutcome(entry.source, entry.target_date, target, SKIPPED)

        if dry_run:
            return RelocationOutcome(entry.source, entry.target_date, target, PLANNED)

        status = move_file(entry.source, target, self.logger)
        self.logger.log_file_moved(entry.source, target)
        return RelocationOutcome(entry.source, entry.target_date, target, status)

    def sort_all(self, entries: Iterable[FileEntry], dry_run: bool = False) -> SortStats:
        """
        Последовательно обрабатывает все файлы. Первая ошибка прерывает запуск.

        Args:
            entries: Файлы с датами
            dry_run: Пробный режим

        Returns:
            SortStats: Статистика сортировки

        Raises:
            SortError: При любой ошибке файловой системы
        """
        for entry in entries:
            try:
                outcome = self.relocate(entry, dry_run)
            except (FileOperationError, OSError) as e:
                self.logger.log_file_error(entry.source, e)
                raise SortError(f"Ошибка обработки файла {entry.source}: {e}") from e

            self.outcomes.append(outcome)
            self.stats.add_outcome(outcome)

        self.stats.directories_created = self.resolver.created_directories
        return self.stats

    def run(self, input_root: Union[str, Path], dry_run: bool = False) -> SortStats:
        """
        Сортирует все файлы из исходного каталога.

        Args:
            input_root: Исходный каталог
            dry_run: Пробный режим

        Returns:
            SortStats: Статистика сортировки

        Raises:
            SortError: При любой ошибке поиска, чтения или перемещения
        """
        self.stats.start_time = datetime.now()

        try:
            entries = self.collect(input_root)
        except (FileOperationError, OSError) as e:
            self.stats.end_time = datetime.now()
            self.logger.log_critical_error("Ошибка поиска файлов", e)
            raise SortError(f"Ошибка поиска файлов: {e}") from e

        self.stats.total_files = len(entries)
        self.logger.log_sort_start(len(entries), Path(input_root), self.output_root)

        if dry_run:
            self.logger.log_dry_run()

        try:
            self.sort_all(entries, dry_run)
        finally:
            self.stats.end_time = datetime.now()

        self.logger.log_sort_end(
            processed=self.stats.processed_files,
            moved=self.stats.moved_files,
            copied=self.stats.copied_files,
            skipped=self.stats.skipped_files,
            planned=self.stats.planned_files
        )

        return self.stats


def create_sorter(config: Config, logger: PhotoSortLogger, output_root: Union[str, Path]) -> Sorter:
    """
    Удобная функция для создания объекта сортировщика.

    Args:
        config: Конфигурация приложения
        logger: Логгер
        output_root: Целевой каталог

    Returns:
        Sorter: Объект сортировщика
    """
    return Sorter(config, logger, output_root)
