"""Runtime settings from FRAME_COLOURS_* variables.

Lookup order (first wins):
  1. The process environment.
  2. A .env file: the --env-file path if given, otherwise the first .env
     found walking up from the working directory, stopping at the nearest
     .git (dir in a clone, file in a worktree).
  3. Built-in defaults.

Only FRAME_COLOURS_* keys are read from a .env file, and os.environ is
never written to. CLI flags override whatever is resolved here.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

PREFIX = 'FRAME_COLOURS_'


def find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        if (directory / '.git').exists():
            return None
    return None


def read_dotenv(path: Path) -> dict[str, str]:
    """FRAME_COLOURS_* assignments from a .env file; other keys are skipped."""
    values: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip().removeprefix('export ').strip()
        key, sep, raw = line.partition('=')
        key = key.strip()
        if line.startswith('#') or not sep or not key.startswith(PREFIX):
            continue
        values[key] = raw.strip().strip('"').strip("'")
    return values


def _int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(PREFIX + name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{PREFIX}{name} must be an integer, got {raw!r}') from None
    if value < minimum:
        raise ValueError(f'{PREFIX}{name} must be >= {minimum}, got {value}')
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(PREFIX + name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f'{PREFIX}{name} must be a number, got {raw!r}') from None
    if value < 0:
        raise ValueError(f'{PREFIX}{name} must be >= 0, got {value}')
    return value


@dataclass
class Settings:
    top_k: int = 5
    slots: int = 5
    fps: float = 0.0  # 0 = replay frames as fast as they decode
    log_level: str = 'WARNING'
    env_path: Path | None = field(default=None, compare=False)  # .env that contributed values

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Parse settings from a mapping (os.environ by default). Raises ValueError naming the bad variable."""
        env = os.environ if env is None else env
        return cls(
            top_k=_int(env, 'TOP_K', cls.top_k, 1),
            slots=_int(env, 'SLOTS', cls.slots, 1),
            fps=_float(env, 'FPS', cls.fps),
            log_level=env.get(PREFIX + 'LOG_LEVEL', '').strip().upper() or cls.log_level,
        )

    @classmethod
    def load(cls, env_file: str | None = None, cwd: Path | None = None) -> Settings:
        """Resolve settings from the environment layered over a .env file.

        Raises FileNotFoundError when an explicit env_file does not exist.
        """
        if env_file:
            path: Path | None = Path(env_file)
            if not path.is_file():
                raise FileNotFoundError(f'.env file not found: {env_file}')
        else:
            path = find_dotenv(cwd or Path.cwd())

        merged = read_dotenv(path) if path else {}
        merged.update((k, v) for k, v in os.environ.items() if k.startswith(PREFIX))
        settings = cls.from_env(merged)
        settings.env_path = path
        return settings
