"""Database engine, sessions and schema installation."""
