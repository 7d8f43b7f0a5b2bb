# pyzke/config.py
from __future__ import annotations
import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CACHE_NAMESPACE = "Ext.netzke.cache"
DEFAULT_MIXIN = "Ext.widgetMixIn"
DEFAULT_BASE_CLASS = "Ext.Panel"
DEFAULT_EXT_LOCATION = "/extjs"


class Config:
    """
    Singleton config loader that supports:
      - an embedded config module (default name: _embedded_config, attribute: CONFIG)
      - a fallback YAML file (pyzke.yaml)

    Usage:
        cfg = Config()  # prefers embedded if available, else loads pyzke.yaml
        namespace = cfg.get("cache_namespace", "Ext.netzke.cache")
        location = cfg.get_nested("ext.location", "/extjs")
        raw = cfg.as_dict()
        cfg.reload()    # re-read embedded/file (useful in dev)

    Parameters:
      config_file: path to YAML config (relative or absolute). Attempts sensible fallbacks.
      prefer_embedded: when True (default) try embedded module first, otherwise check file first.
      embedded_module_name: module name to import when looking for embedded config (default: "_embedded_config")
    """

    _instance: Optional["Config"] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(
        self,
        config_file: str = "pyzke.yaml",
        prefer_embedded: bool = True,
        embedded_module_name: str = "_embedded_config",
    ):
        # initialize only once
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self.config_file_arg = config_file
        self.prefer_embedded = bool(prefer_embedded)
        self.embedded_module_name = embedded_module_name

        self._config: Dict[str, Any] = {}
        self._source: Optional[str] = None  # 'embedded' or 'file' or None

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)

        self.reload()

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance so the next Config() reads its sources again."""
        cls._instance = None

    # ----- public API -----
    def reload(self, prefer_embedded: Optional[bool] = None) -> None:
        """
        Reload the configuration. If prefer_embedded is provided, it overrides the instance preference
        just for this reload.
        """
        if prefer_embedded is None:
            prefer = self.prefer_embedded
        else:
            prefer = bool(prefer_embedded)

        if prefer:
            loaded = self._try_load_embedded() or self._try_load_file()
        else:
            loaded = self._try_load_file() or self._try_load_embedded()

        if not loaded:
            self._source = None
            self._config = {}
        logger.debug("[Config] source=%s keys=%s", self._source, list(self._config.keys()))

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration as a dict (may be empty)."""
        return dict(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "ext.location").
        Returns default if any step is missing.
        """
        cur = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict):
                return default
            if part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    @property
    def is_embedded(self) -> bool:
        """True if the currently loaded config came from the embedded module."""
        return self._source == "embedded"

    @property
    def source(self) -> Optional[str]:
        """Return 'embedded'|'file'|None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        """If a filesystem config was resolved, return its Path, otherwise None."""
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Try to resolve the YAML config path:
          1. If config_file is absolute and exists -> return it
          2. If config_file relative to cwd exists -> return it
          3. else return None
        """
        candidate = Path(config_file)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        p1 = (Path.cwd() / config_file).resolve()
        if p1.exists():
            return p1

        return None

    def _try_load_embedded(self) -> bool:
        """
        Try to import the embedded module and fetch CONFIG. Returns True on success.
        """
        try:
            module = importlib.import_module(self.embedded_module_name)
        except ModuleNotFoundError:
            return False
        logger.debug("[Config] imported %s", module)
        cfg = getattr(module, "CONFIG", None) or getattr(module, "embedded_config", None)
        if isinstance(cfg, dict):
            self._config = dict(cfg)
            self._source = "embedded"
            return True
        return False

    def _try_load_file(self) -> bool:
        """
        Try to load YAML file from resolved path. Returns True on success.
        """
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            logger.warning("[Config] could not parse %s: %s", self._resolved_config_path, e)
            return False
        if isinstance(data, dict):
            self._config = data
        else:
            # YAML parsed but not dict -> store raw under a key
            self._config = {"__root__": data}
        self._source = "file"
        return True


def get_config(*args, **kwargs) -> Config:
    """
    Convenience factory that returns the singleton Config instance.
    Arguments forwarded to Config() only on the first call.
    """
    return Config(*args, **kwargs)


@dataclass(frozen=True)
class EngineSettings:
    """Immutable snapshot of the configuration values the engine reads."""

    cache_namespace: str = DEFAULT_CACHE_NAMESPACE
    mixin: str = DEFAULT_MIXIN
    default_base_class: str = DEFAULT_BASE_CLASS
    ext_location: str = DEFAULT_EXT_LOCATION
    static_root: Optional[str] = None
    strip_js_comments: bool = False

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "EngineSettings":
        cfg = config if config is not None else get_config()
        return cls(
            cache_namespace=cfg.get("cache_namespace", DEFAULT_CACHE_NAMESPACE),
            mixin=cfg.get("mixin", DEFAULT_MIXIN),
            default_base_class=cfg.get("default_base_class", DEFAULT_BASE_CLASS),
            ext_location=cfg.get("ext_location", DEFAULT_EXT_LOCATION),
            static_root=cfg.get("static_root"),
            strip_js_comments=bool(cfg.get("strip_js_comments", False)),
        )
