from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty disables the rotating file handler

    # Rendering
    FIGURE_WIDTH: str = r"0.8\textwidth"
    FIGURE_PLACEMENT: str = "htbp"
    TOC_ENTRY_LEVEL: str = "chapter"

    # mistune plugins enabled when parsing the preprocessed document
    MARKDOWN_PLUGINS: list[str] = ["table", "strikethrough", "footnotes", "task_lists", "url"]

    OUTPUT_SUFFIX: str = ".tex"

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
