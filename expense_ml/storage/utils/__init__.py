from .db import create_tables, describe_database_url, drop_tables, reset_database

__all__ = ["create_tables", "describe_database_url", "drop_tables", "reset_database"]
