import os
import platform
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

import tomlkit
from loguru import logger
from tomlkit.exceptions import ParseError

DEFAULT_STORAGE_FILENAME = "databaseReports.dat"
DEFAULT_EXPORT_DIR = "reports"


class ConfigManager:
    """Settings for equipreport, read from a TOML file and cached for the life of the process.

    One instance exists per application name. Values are looked up as `section.option`,
    e.g. `storage.data_file` or `export.output_dir`. A configuration file that cannot be
    parsed is reported once and ignored, so every setting falls back to its default.

    Attributes:
        app_name (str): The name of the application. (Default: 'equipreport')
        config_dir (Optional[Path]): Explicit directory holding the configuration file.
        config (tomlkit.TOMLDocument): The loaded configuration; comments and layout are preserved.
        config_file_path (Path): The path to the configuration file.
        load_error (Optional[ParseError]): Why the configuration file was ignored, if it was.
    """

    _initialized: bool = False
    _instances: Dict[str, "ConfigManager"] = {}
    _lock = Lock()

    def __new__(
        cls, app_name: str = "equipreport", config_dir: Optional[Union[str, Path]] = None
    ) -> "ConfigManager":
        """Returns the one configuration manager kept for app_name, creating it on first use.

        Args:
            app_name (str): The name of the application. (Default: 'equipreport')
            config_dir (Optional[Union[str, Path]]): Directory to look in instead of the
                per-user configuration directory. Only used when the instance is created.

        Returns:
            ConfigManager: The shared instance for app_name.
        """
        with cls._lock:
            if app_name not in cls._instances:
                instance = super(ConfigManager, cls).__new__(cls)
                instance._initialized = False
                cls._instances[app_name] = instance
            return cls._instances[app_name]

    def __init__(
        self, app_name: str = "equipreport", config_dir: Optional[Union[str, Path]] = None
    ) -> None:
        """Locates and reads the configuration file the first time the instance is built.

        Args:
            app_name (str): The name of the application. (Default: 'equipreport')
            config_dir (Optional[Union[str, Path]]): Directory to look in instead of the
                per-user configuration directory.
        """
        if self._initialized:
            return
        self._initialized = True

        self.app_name = app_name
        self.config_dir = Path(config_dir) / app_name if config_dir else None
        self.config = tomlkit.document()
        self.load_error: Optional[ParseError] = None
        self.config_file_path = self._get_config_file_path()
        self._load_config()

    def _get_config_file_path(self) -> Path:
        """Determines where config.toml lives.

        Returns:
            Path: `<config_dir>/config.toml` when a directory was given, otherwise the
            file under the platform's per-user configuration directory.
        """
        if self.config_dir:
            config_dir = Path(self.config_dir)
        else:
            if platform.system() == "Windows":
                config_dir = Path(os.getenv("APPDATA", str(Path("~\\AppData\\Roaming"))))
            else:
                config_dir = Path(os.getenv("XDG_CONFIG_HOME", str(Path("~/.config"))))
            config_dir = config_dir / self.app_name
        return (config_dir / "config.toml").expanduser()

    def _load_config(self) -> None:
        """Reads the configuration file, keeping the defaults if it is missing or malformed."""
        if not self.config_file_path.exists():
            return
        with open(self.config_file_path, "r", encoding="utf-8") as configfile:
            text = configfile.read()
        try:
            self.config = tomlkit.parse(text)
        except ParseError as err:
            self.load_error = err
            self.config = tomlkit.document()
            logger.error(f"Ignoring malformed configuration file {self.config_file_path}: {err}")
        else:
            self.load_error = None

    def get(self, section: str, option: str, fallback: Optional[Any] = None) -> Any:
        """Gets a configuration value.

        Args:
            section (str): The section within the configuration file.
            option (str): The option within the section.
            fallback (Optional[Any]): Returned when the option is not set.

        Returns:
            Any: The configuration value or the fallback value.
        """
        return self.config.get(section, {}).get(option, fallback)

    def set(self, section: str, option: str, value: Any) -> None:
        """Sets a configuration value and writes the file back out.

        Args:
            section (str): The section within the configuration file.
            option (str): The option within the section.
            value (Any): The value to store.

        Raises:
            ParseError: If the file on disk could not be parsed; it is left untouched
                rather than replaced by a file holding only this one value.
        """
        if self.load_error is not None:
            raise self.load_error
        if section not in self.config:
            self.config[section] = tomlkit.table()
        self.config[section][option] = value
        self._save_config()

    def _save_config(self) -> None:
        """Writes the configuration document to the configuration file."""
        if not self.config_file_path.exists():
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file_path, "w", encoding="utf-8") as configfile:
            configfile.write(tomlkit.dumps(self.config))

    @classmethod
    def delete_instance(cls, app_name: str) -> None:
        """Forgets the shared instance for app_name; the next lookup reads the file again.

        Args:
            app_name (str): The name of the application.
        """
        with cls._lock:
            if app_name in cls._instances:
                del cls._instances[app_name]

    def get_data_dir_path(self) -> Path:
        """Determines the per-user directory where the report storage file lives by default.

        Returns:
            Path: The path to the data directory.
        """
        if platform.system() == "Windows":
            data_dir = Path(os.getenv("LOCALAPPDATA", str(Path("~\\AppData\\Local"))))
        else:
            data_dir = Path(os.getenv("XDG_DATA_HOME", str(Path("~/.local/share"))))
        data_dir = data_dir / self.app_name
        return data_dir.expanduser()

    def _get_path(self, section: str, option: str) -> Optional[Path]:
        configured = self.get(section, option)
        if not configured:
            return None
        return Path(str(configured)).expanduser()

    def get_storage_file_path(self) -> Path:
        """Path of the report storage file: `storage.data_file`, or databaseReports.dat in
        the data directory."""
        return self._get_path("storage", "data_file") or (
            self.get_data_dir_path() / DEFAULT_STORAGE_FILENAME
        )

    def get_export_dir_path(self) -> Path:
        """Directory for exported report files: `export.output_dir`, or ./reports."""
        return self._get_path("export", "output_dir") or Path(DEFAULT_EXPORT_DIR)
