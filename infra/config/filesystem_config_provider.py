from __future__ import annotations

import json
import re
from pathlib import Path

from domain.models import AppConfig, AuthUser

_LOG_LEVELS = {"info", "warning", "error"}
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


class ConfigFileError(ValueError):
    """config.json exists but cannot be read as a JSON object."""


class FileSystemConfigProvider:
    """Reads config.json from a config directory.

    Every public method re-reads from disk so that edits
    to the JSON file take effect without restarting the app.
    """

    def __init__(self, config_dir: str) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def validate(self) -> list[str]:
        errors: list[str] = []
        path = self.config_path
        if not path.is_file():
            errors.append(f"Missing file: {path}")
            return errors
        try:
            data = self._read_json()
        except ConfigFileError as exc:
            errors.append(str(exc))
            return errors

        errors.extend(self._validate_settings(data))
        errors.extend(self._validate_user(data.get("user")))
        return errors

    @staticmethod
    def _validate_settings(data: dict) -> list[str]:
        errors: list[str] = []
        db_path = data.get("db_path")
        if db_path is not None and (not isinstance(db_path, str) or not db_path.strip()):
            errors.append("db_path must be a non-empty string.")

        list_limit = data.get("list_limit")
        if list_limit is not None and (
            isinstance(list_limit, bool) or not isinstance(list_limit, int) or list_limit <= 0
        ):
            errors.append("list_limit must be a positive integer.")

        currency = data.get("default_currency")
        if currency is not None and not _CURRENCY_PATTERN.match(str(currency)):
            errors.append("default_currency must be a three-letter code such as 'USD'.")

        log_level = data.get("log_level")
        if log_level is not None and log_level not in _LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(sorted(_LOG_LEVELS))}.")

        discard = data.get("discard_stale_loads")
        if discard is not None and not isinstance(discard, bool):
            errors.append("discard_stale_loads must be a boolean (true/false), not a string.")
        return errors

    @staticmethod
    def _validate_user(user: object) -> list[str]:
        if user is None:
            return []
        if not isinstance(user, dict):
            return ["user must be an object with 'id' and 'email'."]
        errors: list[str] = []
        if not str(user.get("id", "")).strip():
            errors.append("user.id cannot be empty.")
        email = str(user.get("email", ""))
        if not _EMAIL_PATTERN.match(email):
            errors.append(f"user.email '{email}' is not a valid email address.")
        return errors

    def get_config(self) -> AppConfig:
        data = self._read_json()
        defaults = AppConfig()
        return AppConfig(
            db_path=data.get("db_path", defaults.db_path),
            list_limit=int(data.get("list_limit", defaults.list_limit)),
            default_currency=data.get("default_currency", defaults.default_currency),
            log_level=data.get("log_level", defaults.log_level),
            discard_stale_loads=bool(data.get("discard_stale_loads", defaults.discard_stale_loads)),
        )

    def get_user(self) -> AuthUser | None:
        """The locally signed-in user, or ``None`` when signed out."""
        if not self.config_path.is_file():
            return None
        user = self._read_json().get("user")
        if not user:
            return None
        return AuthUser(id=str(user["id"]), email=str(user["email"]))

    def set_user(self, user: AuthUser | None) -> None:
        data = self._read_json() if self.config_path.is_file() else {}
        if user is None:
            data.pop("user", None)
        else:
            data["user"] = {"id": user.id, "email": user.email}
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    # -- internal helpers ---------------------------------------------------

    def _read_json(self) -> dict:
        path = self.config_path
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise ConfigFileError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigFileError(f"{path.name} must contain a JSON object")
        return data
