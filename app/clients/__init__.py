from .google_sheets import SheetsClient

__all__ = ["SheetsClient"]
