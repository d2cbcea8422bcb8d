"""SQLModel table models."""
