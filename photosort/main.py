"""
Главный модуль CLI интерфейса утилиты сортировки фотографий.

Раскладывает файлы из исходного каталога по каталогам
<YYYY>/<YYYY-MM-DD> в целевом каталоге по дате изменения файла.
"""

import argparse
import sys
from typing import Optional

try:
    from .config_loader import Config, default_config, load_config, validate_config
    from .logger import PhotoSortLogger
    from .sorter import Sorter, SortError, create_sorter
    from .file_ops import FileOperationError
except ImportError:
    from config_loader import Config, default_config, load_config, validate_config
    from logger import PhotoSortLogger
    from sorter import Sorter, SortError, create_sorter
    from file_ops import FileOperationError


class PhotoSortCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config: Optional[Config] = None
        self.logger: Optional[PhotoSortLogger] = None
        self.sorter: Optional[Sorter] = None

    def setup(self, args) -> bool:
        """
        Инициализирует CLI: конфигурацию, логгер и сортировщик.

        Args:
            args: Аргументы командной строки

        Returns:
            bool: True если инициализация успешна
        """
        try:
            self.config = load_config(args.config) if args.config else default_config()

            if args.suffix is not None:
                self.config.sorter.suffix = args.suffix or None
            if args.verbose:
                self.config.logging.level = 'DEBUG'
            validate_config(self.config)

            self.logger = PhotoSortLogger(self.config.logging)
            self.sorter = create_sorter(self.config, self.logger, args.output)

            if args.config:
                self.logger.log_system_info(f"Конфигурация загружена из: {args.config}")
            return True

        except (FileNotFoundError, ValueError, OSError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            return False

    def cmd_sort(self, args) -> int:
        """
        Команда сортировки файлов.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        dry_run = args.dry_run or self.config.sorter.dry_run

        try:
            stats = self.sorter.run(args.input, dry_run=dry_run)
        except SortError as e:
            print(f"❌ Ошибка сортировки: {e}")
            return 1
        except FileOperationError as e:
            print(f"❌ Ошибка файловой системы: {e}")
            return 1

        duration = stats.get_duration() or 0.0
        print(f"\n✅ Готово за {duration:.2f} сек: "
              f"перемещено {stats.moved_files + stats.copied_files}, "
              f"пропущено {stats.skipped_files}, "
              f"создано каталогов {stats.directories_created}")
        if dry_run:
            print(f"ℹ️ Пробный запуск: запланировано {stats.planned_files} файлов")

        return 0


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog='photosort',
        description="Сортировка фотографий по каталогам <год>/<год-месяц-день> по дате изменения",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Разложить фотографии по датам
  photosort ~/camera ~/photos

  # Только показать, что будет сделано
  photosort ~/camera ~/photos --dry-run

  # Все файлы, а не только .JPG
  photosort ~/camera ~/photos --suffix ""
        """
    )

    parser.add_argument('input', help='Исходный каталог')
    parser.add_argument('output', help='Целевой каталог')
    parser.add_argument(
        '-d', '--dry-run',
        action='store_true',
        help='Пробный запуск: ничего не перемещать, не копировать и не удалять'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Путь к файлу конфигурации (например, config/settings.ini)'
    )
    parser.add_argument(
        '--suffix',
        default=None,
        help='Окончание имени файла для отбора (по умолчанию: .JPG, пустая строка - все файлы)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    return parser


def main(argv=None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = PhotoSortCLI()

    if not cli.setup(args):
        return 1

    try:
        return cli.cmd_sort(args)
    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    finally:
        cli.logger.close()


if __name__ == "__main__":
    sys.exit(main())
