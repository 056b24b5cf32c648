"""I/O utilities for CSV import/export."""

from .export_csv import export_schedule_csv, export_stored_schedule_csv
from .import_csv import import_availability_csv, import_employees_csv, import_requirements_csv

__all__ = [
    "import_employees_csv",
    "import_availability_csv",
    "import_requirements_csv",
    "export_schedule_csv",
    "export_stored_schedule_csv",
]
