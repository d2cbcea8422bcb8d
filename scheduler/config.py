"""Application configuration for the Task Scheduler."""
from pydantic import BaseModel
from dotenv import load_dotenv
from fastapi import Request
import os


class Settings(BaseModel):
    """Runtime settings, read once at startup and passed to the app factory.

    Environment variables:
        TODO_PASSWORD: password used for sign-in and as the JWT signing key
        TODO_PORT:     HTTP server port
        TODO_DBFILE:   path to the SQLite database file
        TODO_WEBDIR:   directory with the static web UI
    """
    password: str = "12345"
    port: int = 7540
    db_file: str = "scheduler.db"
    web_dir: str = "./web"
    token_ttl_hours: int = 8
    tasks_limit: int = 50

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, loading .env if present."""
        load_dotenv()
        values = {}
        if os.environ.get("TODO_PASSWORD"):
            values["password"] = os.environ["TODO_PASSWORD"]
        if os.environ.get("TODO_PORT"):
            values["port"] = os.environ["TODO_PORT"]
        if os.environ.get("TODO_DBFILE"):
            values["db_file"] = os.environ["TODO_DBFILE"]
        if os.environ.get("TODO_WEBDIR"):
            values["web_dir"] = os.environ["TODO_WEBDIR"]
        return cls(**values)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.password)

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_file}"


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings the running app was created with."""
    return request.app.state.settings
