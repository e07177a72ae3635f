"""
Модуль для операций с файловой системой.

Обеспечивает рекурсивный поиск файлов, определение даты изменения файла
и перемещение файла с переходом на копирование, если переименование
невозможно (например, между разными томами).
"""

import os
import shutil
import hashlib
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union


PathLike = Union[str, Path]

MOVED = "moved"
COPIED = "copied"


class FileOperationError(Exception):
    """Исключение для ошибок операций с файлами."""
    pass


class EnumerationError(FileOperationError):
    """Ошибка обхода дерева каталогов."""
    pass


class MetadataError(FileOperationError):
    """Ошибка чтения метаданных файла."""
    pass


class DirectoryCreationError(FileOperationError):
    """Ошибка создания целевого каталога."""
    pass


class RelocationError(FileOperationError):
    """Ошибка перемещения или копирования файла."""
    pass


@dataclass(frozen=True)
class FileEntry:
    """Найденный файл и дата, по которой он будет размещен."""
    source: Path
    target_date: date


def _raise_walk_error(error: OSError) -> None:
    raise EnumerationError(f"Ошибка обхода каталога {error.filename}: {error}") from error


def list_files(root: PathLike, suffix: Optional[str] = None) -> List[Path]:
    """
    Рекурсивно получает список путей в каталоге.

    В результат входят сам корень, каталоги и файлы в порядке обхода
    (имена отсортированы). Если задан суффикс, остаются только пути,
    строковое представление которых оканчивается на него (с учетом регистра).

    Args:
        root: Корневой каталог
        suffix: Суффикс для фильтрации, например ".JPG"

    Returns:
        List[Path]: Список путей

    Raises:
        EnumerationError: Если каталог не существует или недоступен
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise EnumerationError(f"Каталог не найден: {root_path}")

    result = []

    def keep(path: Path) -> None:
        if suffix is None or str(path).endswith(suffix):
            result.append(path)

    keep(root_path)
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        dirnames.sort()
        current = Path(dirpath)
        for name in dirnames:
            keep(current / name)
        for name in sorted(filenames):
            keep(current / name)

    return result


def modification_date(path: PathLike) -> date:
    """
    Получает дату последнего изменения файла (UTC, без времени).

    Args:
        path: Путь к файлу

    Returns:
        date: Календарная дата изменения

    Raises:
        MetadataError: Если метаданные недоступны
    """
    try:
        mtime = os.stat(path).st_mtime
    except OSError as e:
        raise MetadataError(f"Ошибка чтения метаданных {path}: {e}") from e

    return datetime.fromtimestamp(mtime, tz=timezone.utc).date()


def parse_files(paths: Iterable[PathLike]) -> List[FileEntry]:
    """
    Определяет дату для каждого пути. Первая же ошибка прерывает разбор.

    Args:
        paths: Пути к файлам

    Returns:
        List[FileEntry]: Записи в исходном порядке
    """
    return [FileEntry(source=Path(p), target_date=modification_date(p)) for p in paths]


def ensure_directory(path: PathLike) -> Path:
    """
    Создает каталог вместе с родительскими.

    Raises:
        DirectoryCreationError: Если каталог не удалось создать
    """
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"Ошибка создания каталога {directory}: {e}") from e
    return directory


def get_file_hash(path: PathLike, algorithm: str = 'md5') -> str:
    """
    Вычисляет хеш файла для проверки целостности.

    Args:
        path: Путь к файлу
        algorithm: Алгоритм хеширования (md5, sha1, sha256)

    Returns:
        str: Хеш файла в шестнадцатеричном виде
    """
    if algorithm == 'md5':
        hasher = hashlib.md5()
    elif algorithm == 'sha1':
        hasher = hashlib.sha1()
    elif algorithm == 'sha256':
        hasher = hashlib.sha256()
    else:
        raise ValueError(f"Неподдерживаемый алгоритм: {algorithm}")

    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(65536), b""):
            hasher.update(chunk)

    return hasher.hexdigest()


def _copy_verified(source: Path, target: Path) -> None:
    """
    Копирует файл и проверяет копию по размеру и хешу.

    При любой ошибке частичная копия удаляется, исходный файл не трогается.
    """
    try:
        shutil.copy2(source, target)
        if source.stat().st_size != target.stat().st_size:
            raise RelocationError(f"Размер копии {target} не совпадает с {source}")
        if get_file_hash(source) != get_file_hash(target):
            raise RelocationError(f"Хеш копии {target} не совпадает с {source}")
    except (OSError, RelocationError) as e:
        try:
            if target.exists():
                os.remove(target)
        except OSError:
            # Исходный файл цел, остаток копии не критичен
            pass
        if isinstance(e, RelocationError):
            raise
        raise RelocationError(f"Ошибка копирования {source} → {target}: {e}") from e


def move_file(source: PathLike, target: PathLike, logger=None) -> str:
    """
    Перемещает файл, при неудаче переименования копирует и удаляет исходник.

    Исходный файл удаляется только после полностью завершенной
    и проверенной копии.

    Args:
        source: Исходный путь
        target: Целевой путь (не должен существовать)
        logger: Логгер для сообщения о переходе на копирование

    Returns:
        str: "moved" или "copied"

    Raises:
        RelocationError: Если файл не удалось ни переместить, ни скопировать
    """
    source_path = Path(source)
    target_path = Path(target)

    try:
        os.rename(source_path, target_path)
        return MOVED
    except OSError as e:
        if logger is not None:
            logger.log_copy_fallback(source_path, target_path, e)

    _copy_verified(source_path, target_path)

    try:
        os.remove(source_path)
    except OSError as e:
        raise RelocationError(f"Копия {target_path} создана, но исходный файл {source_path} не удален: {e}") from e

    return COPIED
