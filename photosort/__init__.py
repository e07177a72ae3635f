"""
photosort

Утилита для сортировки фотографий из плоской структуры в структуру по датам (YYYY/YYYY-MM-DD).
"""

__version__ = "1.0.0"
__author__ = "Photo Sort Team"
__description__ = "Utility for sorting photos into a year/date directory tree by modification date"
