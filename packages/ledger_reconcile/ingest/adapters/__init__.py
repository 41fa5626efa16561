from .bank_csv import to_statement_rows

__all__ = ["to_statement_rows"]
