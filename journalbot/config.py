"""JournalBot settings.

One ``Settings`` object exists per process.  ``Settings.load()`` builds it
from ``.metadata/settings.yaml`` the first time and hands back the same
object afterwards; tests call ``Settings.reset()`` between runs.

A fresh checkout has no ``.metadata/`` directory: it is created and seeded
with the files in ``.metadata.example/``.
"""

import logging
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("development", "production", "test")


class _SingletonMeta(type):
    """Caches the first instance of each class built with it."""

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


@dataclass
class Settings(metaclass=_SingletonMeta):
    """Server, database, external-site and job settings."""

    db_path: Path = Path("journals.db")
    metadata_dir: Path = Path(".metadata")
    environment: str = "development"
    log_level: str = "INFO"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 5050

    # Google Scholar / WordPress requests
    scholar_timeout: float = 5.0
    wordpress_timeout: float = 5.0
    wordpress_per_page: int = 10

    # verify-pending job
    verification_batch_size: int = 50
    verification_stale_days: int = 7
    verification_delay: float = 2.0
    manual_verification_limit: int = 5

    recommendation_limit: int = 5

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def update(self, **kwargs: Any) -> None:
        """Set fields in place; unknown names raise AttributeError."""
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no field '{key}'")
            setattr(self, key, value)

    @classmethod
    def load(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Return the process settings, reading them from disk on first use.

        Args:
            base_dir: Project root holding ``.metadata/`` (defaults to the
                directory above the ``journalbot`` package). A relative
                ``db_path`` is resolved against it.
        """
        if cls in _SingletonMeta._instances:
            return _SingletonMeta._instances[cls]  # type: ignore[return-value]

        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent

        metadata_dir = base_dir / ".metadata"
        _seed_metadata_dir(base_dir, metadata_dir)

        values = _load_settings_file(metadata_dir / "settings.yaml")
        db_path = Path(values.pop("db_path", "journals.db"))
        if not db_path.is_absolute():
            db_path = base_dir / db_path

        return cls(db_path=db_path, metadata_dir=metadata_dir, **values)

    @classmethod
    def reload(cls, base_dir: Optional[Path] = None) -> "Settings":
        cls.reset()
        return cls.load(base_dir)

    @classmethod
    def reset(cls) -> None:
        """Forget the cached settings; the next ``load()`` reads the YAML again."""
        _SingletonMeta._instances.pop(cls, None)


def _seed_metadata_dir(base_dir: Path, metadata_dir: Path) -> None:
    """Create *metadata_dir* and copy in any ``.metadata.example/`` file it lacks."""
    metadata_dir.mkdir(parents=True, exist_ok=True)

    templates = base_dir / ".metadata.example"
    if not templates.is_dir():
        return

    for template in templates.iterdir():
        target = metadata_dir / template.name
        if template.is_file() and not target.exists():
            shutil.copy2(template, target)
            logger.info("Created %s from template", target)


_FIELD_TYPES: dict[str, type] = {
    "db_path": str,
    "environment": str,
    "log_level": str,
    "host": str,
    "port": int,
    "scholar_timeout": float,
    "wordpress_timeout": float,
    "wordpress_per_page": int,
    "verification_batch_size": int,
    "verification_stale_days": int,
    "verification_delay": float,
    "manual_verification_limit": int,
    "recommendation_limit": int,
}


def _load_settings_file(path: Path) -> dict[str, Any]:
    """Load known settings keys from ``settings.yaml``.

    Unknown keys are ignored; values that cannot be coerced to the
    field's type are dropped so the dataclass default applies.
    """
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Could not parse %s, using defaults: %s", path, e)
        return {}
    if not isinstance(data, dict):
        return {}

    values: dict[str, Any] = {}
    for key, caster in _FIELD_TYPES.items():
        if key not in data or data[key] is None:
            continue
        try:
            values[key] = caster(data[key])
        except (TypeError, ValueError):
            logger.warning("Invalid value for '%s' in %s: %r", key, path, data[key])

    if values.get("environment") not in (None, *ENVIRONMENTS):
        logger.warning("Unknown environment %r, using development", values["environment"])
        values.pop("environment")
    return values


def save_settings(path: Path, settings: Settings) -> None:
    """Persist the editable settings fields to ``settings.yaml``."""
    data: dict[str, Any] = {}
    for f in fields(settings):
        if f.name not in _FIELD_TYPES:
            continue
        value = getattr(settings, f.name)
        data[f.name] = str(value) if isinstance(value, Path) else value
    with open(path, "w", encoding="utf-8") as f:
        f.write("# JournalBot settings\n")
        yaml.dump(
            data,
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
