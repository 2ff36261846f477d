import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = False
    resume_timeout: float = 15.0
    resume_max_bytes: int = 5 * 1024 * 1024


def load_env() -> None:
    """Load .env from the working directory if present.

    Values already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise SystemExit(f"{name} must be a number, got {raw!r}")


def get_settings() -> Settings:
    """Read INTERNMATCH_* settings from the environment."""
    defaults = Settings()
    return Settings(
        log_level=os.getenv("INTERNMATCH_LOG_LEVEL", defaults.log_level).upper(),
        log_dir=Path(os.getenv("INTERNMATCH_LOG_DIR", str(defaults.log_dir))),
        log_to_file=os.getenv("INTERNMATCH_LOG_TO_FILE", "false").strip().lower() in TRUTHY,
        resume_timeout=_float("INTERNMATCH_RESUME_TIMEOUT", defaults.resume_timeout),
        resume_max_bytes=int(_float("INTERNMATCH_RESUME_MAX_BYTES", defaults.resume_max_bytes)),
    )
