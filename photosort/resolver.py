"""
Модуль определения целевого каталога по дате.

Сопоставляет календарную дату каталогу вида <root>/<YYYY>/<YYYY-MM-DD>.
Если в каталоге года уже есть подкаталог, имя которого начинается с этой
даты (например, 2023-05-01-vacation), используется он. Результаты
кэшируются на время одного запуска.
"""

import os
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Union

try:
    from .file_ops import EnumerationError, ensure_directory
    from .logger import PhotoSortLogger
except ImportError:
    from file_ops import EnumerationError, ensure_directory
    from logger import PhotoSortLogger


def date_directory_name(target_date: date) -> str:
    """Имя каталога даты: YYYY-MM-DD."""
    return f"{target_date.year}-{target_date.month:02d}-{target_date.day:02d}"


class DestinationResolver:
    """Определяет и кэширует каталог назначения для каждой даты."""

    def __init__(self, root: Union[str, Path], logger: Optional[PhotoSortLogger] = None):
        """
        Args:
            root: Корневой каталог для отсортированных файлов
            logger: Логгер для записи операций
        """
        self.root = Path(root)
        self.logger = logger
        self._cache: Dict[date, Path] = {}
        self.created_directories = 0

    def canonical_path(self, target_date: date) -> Path:
        """Каноничный путь каталога для даты: <root>/<YYYY>/<YYYY-MM-DD>."""
        return self.root / str(target_date.year) / date_directory_name(target_date)

    def cached_dates(self) -> List[date]:
        """Даты, для которых каталог уже определен в этом запуске."""
        return list(self._cache)

    def resolve(self, target_date: date, dry_run: bool = False) -> Path:
        """
        Возвращает каталог для даты, при необходимости создавая его.

        Args:
            target_date: Календарная дата файла
            dry_run: Не создавать каталоги

        Returns:
            Path: Путь к каталогу даты

        Raises:
            EnumerationError: Если каталог года не удалось прочитать
            DirectoryCreationError: Если каталог не удалось создать
        """
        cached = self._cache.get(target_date)
        if cached is not None:
            return cached

        year_path = self.root / str(target_date.year)

        # Каталога года нет: это первый файл за этот год
        if not year_path.exists():
            return self._create(target_date, dry_run)

        existing = self._find_existing(year_path, target_date)
        if existing is not None:
            if self.logger is not None:
                self.logger.log_directory_reused(existing)
            self._cache[target_date] = existing
            return existing

        return self._create(target_date, dry_run)

    def _find_existing(self, year_path: Path, target_date: date) -> Optional[Path]:
        """
        Ищет среди подкаталогов года каталог, начинающийся с даты.

        Сравнивается строка пути относительно корня, а не отдельный
        компонент пути, поэтому 2023-05-011-other тоже совпадет с 2023-05-01.
        """
        prefix = os.path.join(str(target_date.year), date_directory_name(target_date))

        try:
            with os.scandir(year_path) as entries:
                children = sorted(
                    (entry for entry in entries if entry.is_dir(follow_symlinks=False)),
                    key=lambda entry: entry.name
                )
        except OSError as e:
            raise EnumerationError(f"Ошибка чтения каталога {year_path}: {e}") from e

        for child in children:
            child_path = Path(child.path)
            relative = str(child_path.relative_to(self.root))
            if relative.startswith(prefix):
                return child_path

        return None

    def _create(self, target_date: date, dry_run: bool) -> Path:
        path = self.canonical_path(target_date)

        if not dry_run:
            ensure_directory(path)
            self.created_directories += 1
            if self.logger is not None:
                self.logger.log_directory_created(path)

        self._cache[target_date] = path
        return path
