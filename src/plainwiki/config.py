"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings.

    The defaults are the wiki's fixed layout; environment variables only
    exist so a deployment (or a test) can point the wiki somewhere else.
    """

    data_dir: Path = Path("data")
    data_format: str = ".md"
    templates_dir: Path = PACKAGE_DIR / "templates"
    includes_dir: Path = PACKAGE_DIR / "includes"
    template_format: str = ".html"
    static_dir: Path = PACKAGE_DIR / "static"
    front_page: str = "FrontPage"
    host: str = "127.0.0.1"
    port: int = 8000
    app_title: str = "PlainWiki"
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PLAINWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
