"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (PRAXIS_LLM_PROVIDER, PRAXIS_LLM_MODEL)
  2. Project config (<root>/praxis.config.yaml)
  3. User config (~/.praxis/config.yaml)
  4. Defaults

API keys are NEVER stored in config files.
They must be provided via environment variables.
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Union

from .presentation.symbols import get_symbols


# Supported providers and their defaults
PROVIDERS = {
    "openrouter": {
        "env_key": "OPENROUTER_API_KEY",
        "default_model": "anthropic/claude-sonnet-4",
        "base_url": "https://openrouter.ai/api/v1",
    },
    "openai": {
        "env_key": "OPENAI_API_KEY",
        "default_model": "gpt-5-mini",
        "base_url": None,
    },
    "claude": {
        "env_key": "ANTHROPIC_API_KEY",
        "default_model": "claude-sonnet-4-20250514",
        "base_url": None,
    },
}

DEFAULT_PROVIDER = "openrouter"

KNOWN_PLUGINS = ("claude-code",)

DEFAULT_SOURCES = ["content"]
DEFAULT_AGENT_PROFILES_DIR = "./agent-profiles"
DEFAULT_CACHE_DIR = ".praxis/cache/validation"


@dataclass
class LLMConfig:
    """LLM provider configuration."""
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None  # None = use provider default

    @property
    def effective_model(self) -> str:
        """Get model, falling back to provider default."""
        if self.model:
            return self.model
        return PROVIDERS.get(self.provider, {}).get("default_model", "")

    @property
    def api_key_env(self) -> str:
        """Get environment variable name for API key."""
        return PROVIDERS.get(self.provider, {}).get("env_key", "")

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from environment. Never stored."""
        if not self.api_key_env:
            return None
        return os.environ.get(self.api_key_env)

    @property
    def base_url(self) -> Optional[str]:
        return PROVIDERS.get(self.provider, {}).get("base_url")

    @property
    def is_available(self) -> bool:
        """Check if provider is configured and available."""
        return bool(self.api_key)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.provider not in PROVIDERS:
            valid = ", ".join(PROVIDERS.keys())
            return f"Unknown provider '{self.provider}'. Valid: {valid}"
        return None


@dataclass
class CompileConfig:
    """Compiler compatibility switches."""
    # Expand `constitution: true` to every constitution document
    legacy_constitution_glob: bool = False

    def validate(self) -> Optional[str]:
        if not isinstance(self.legacy_constitution_glob, bool):
            return "compile.legacy_constitution_glob must be true or false"
        return None


@dataclass
class PluginEntry:
    """One output plugin, from a bare name or a mapping."""
    name: str
    output_dir: Optional[str] = None
    plugin_name: str = "praxis"

    @classmethod
    def from_raw(cls, raw: Union[str, Dict[str, Any]]) -> 'PluginEntry':
        if isinstance(raw, dict):
            return cls(
                name=str(raw.get("name", "")),
                output_dir=raw.get("output_dir"),
                plugin_name=raw.get("plugin_name") or "praxis",
            )
        return cls(name=str(raw))

    def to_dict(self) -> Union[str, Dict[str, Any]]:
        if self.output_dir is None and self.plugin_name == "praxis":
            return self.name
        data: Dict[str, Any] = {"name": self.name, "plugin_name": self.plugin_name}
        if self.output_dir is not None:
            data["output_dir"] = self.output_dir
        return data


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    sources: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    agent_profiles_dir: Union[str, bool, None] = DEFAULT_AGENT_PROFILES_DIR
    plugins: List[PluginEntry] = field(default_factory=list)
    cache_dir: str = DEFAULT_CACHE_DIR
    compile: CompileConfig = field(default_factory=CompileConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def profiles_path(self, root: Path) -> Optional[Path]:
        """Absolute profile output directory, or None when disabled."""
        if self.agent_profiles_dir is False or self.agent_profiles_dir is None:
            return None
        return (Path(root) / str(self.agent_profiles_dir)).resolve()

    def cache_path(self, root: Path) -> Path:
        return (Path(root) / self.cache_dir).resolve()

    def source_paths(self, root: Path) -> List[Path]:
        return [(Path(root) / source).resolve() for source in self.sources]

    def validate(self) -> Optional[str]:
        """First error across all sections, or None."""
        if not self.sources:
            return "sources must name at least one directory"
        if self.agent_profiles_dir is True:
            return "agent_profiles_dir must be a path or false"
        for entry in self.plugins:
            if entry.name not in KNOWN_PLUGINS:
                return f"Unknown plugin '{entry.name}'. Valid: {', '.join(KNOWN_PLUGINS)}"
        for section in (self.compile, self.llm, self.display):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sources": list(self.sources),
            "agent_profiles_dir": self.agent_profiles_dir,
            "plugins": [entry.to_dict() for entry in self.plugins],
            "cache_dir": self.cache_dir,
            "compile": {
                "legacy_constitution_glob": self.compile.legacy_constitution_glob,
            },
            "llm": {
                "provider": self.llm.provider,
                "model": self.llm.model,
            },
            "display": {
                "symbols": self.display.symbols,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        compile_data = data.get("compile") or {}
        llm_data = data.get("llm") or {}
        display_data = data.get("display") or {}

        sources = data.get("sources", DEFAULT_SOURCES)
        if isinstance(sources, str):
            sources = [sources]

        return cls(
            sources=list(sources),
            agent_profiles_dir=data.get("agent_profiles_dir", DEFAULT_AGENT_PROFILES_DIR),
            plugins=[PluginEntry.from_raw(raw) for raw in data.get("plugins") or []],
            cache_dir=data.get("cache_dir") or DEFAULT_CACHE_DIR,
            compile=CompileConfig(
                legacy_constitution_glob=compile_data.get("legacy_constitution_glob", False),
            ),
            llm=LLMConfig(
                provider=llm_data.get("provider", DEFAULT_PROVIDER),
                model=llm_data.get("model"),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
            ),
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment overrides
      2. Project config (praxis.config.yaml)
      3. User config (~/.praxis/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".praxis"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_FILE = "praxis.config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else None
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path or self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("PRAXIS_LLM_PROVIDER"):
            config_data.setdefault("llm", {})["provider"] = os.environ["PRAXIS_LLM_PROVIDER"]
        if os.environ.get("PRAXIS_LLM_MODEL"):
            config_data.setdefault("llm", {})["model"] = os.environ["PRAXIS_LLM_MODEL"]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Parse one YAML layer. A malformed file is a fatal config error."""
        if not path.exists():
            return {}
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {path}: expected a mapping")
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._config = config

    def set(self, key: str, value: str) -> Optional[str]:
        """
        Set a project configuration value.

        Args:
            key: Dot-separated key (e.g., "llm.provider")
            value: Value to set

        Returns:
            Error message or None if successful
        """
        config = self.load()

        if key == "agent_profiles_dir":
            config.agent_profiles_dir = False if value.lower() in ("false", "none", "off") else value
        elif key == "cache_dir":
            config.cache_dir = value
        elif key == "llm.provider":
            config.llm.provider = value
        elif key == "llm.model":
            config.llm.model = value
        elif key == "compile.legacy_constitution_glob":
            config.compile.legacy_constitution_glob = value.lower() in ("true", "1", "yes")
        elif key == "display.symbols":
            config.display.symbols = value
        else:
            valid = ("agent_profiles_dir, cache_dir, llm.provider, llm.model, "
                     "compile.legacy_constitution_glob, display.symbols")
            return f"Unknown setting: {key}. Valid: {valid}"

        error = config.validate()
        if error:
            self._config = None
            return error

        self.save_project(config)
        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        api_key_status = f"{symbols.check_pass} Set" if config.llm.is_available else f"{symbols.check_fail} Missing"
        profiles = config.agent_profiles_dir if config.agent_profiles_dir else "(disabled)"
        plugins = ", ".join(entry.name for entry in config.plugins) or "(none)"

        lines = [
            "Configuration:",
            "",
            f"  Sources: {', '.join(config.sources)}",
            f"  Agent profiles: {profiles}",
            f"  Plugins: {plugins}",
            f"  Cache: {config.cache_dir}",
            "",
            "Compile:",
            f"  Legacy constitution glob: {config.compile.legacy_constitution_glob}",
            "",
            "LLM:",
            f"  Provider: {config.llm.provider}",
            f"  Model: {config.llm.effective_model}",
            f"  API Key: {api_key_status}",
        ]

        if not config.llm.is_available and config.llm.api_key_env:
            lines.append(f"  (Set {config.llm.api_key_env} environment variable)")

        lines.extend([
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
