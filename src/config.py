"""Runtime configuration loaded from the environment (.env supported)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_EXTRACT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_DB_PATH = "candidates.db"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"


@dataclass(frozen=True)
class Settings:
    groq_api_key: str = ""
    # Evaluation model has no default: evaluation refuses to run without one.
    groq_model: str = ""
    extract_model: str = DEFAULT_EXTRACT_MODEL
    db_path: str = DEFAULT_DB_PATH
    log_dir: Path = DEFAULT_LOG_DIR

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        model = os.environ.get("GROQ_MODEL", "").strip()
        return cls(
            groq_api_key=os.environ.get("GROQ_API_KEY", "").strip(),
            groq_model=model,
            extract_model=os.environ.get("GROQ_EXTRACT_MODEL", "").strip() or model or DEFAULT_EXTRACT_MODEL,
            db_path=os.environ.get("CANDIDATES_DB_PATH", "").strip() or DEFAULT_DB_PATH,
            log_dir=Path(os.environ.get("LOG_DIR", "").strip() or DEFAULT_LOG_DIR),
        )
