# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating SpamSift configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/spamsift/  (default: ~/.config/spamsift/)
#
# Files:
#   - config.toml: User configuration (corpus location, model behavior,
#                  evaluation split, server address)
#
# Every setting has a default, so a missing config file is not an error.
# =============================================================================

import codecs
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "spamsift"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for SpamSift.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/spamsift/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class CorpusConfig:
    """
    Configuration for reading the training corpus.

    Attributes:
        path: Corpus file. Relative paths resolve against the working directory.
        encoding: Text encoding of the corpus file.
        encoding_errors: How undecodable bytes are handled. "replace" keeps
                         loading going; "strict" stops at the first bad byte
                         (records read up to that point are kept).
    """
    path: str = "spam_ham_dataset.csv"
    encoding: str = "utf-8"
    encoding_errors: str = "replace"


@dataclass
class ModelConfig:
    """
    Configuration for classifier behavior on degenerate training data.

    Attributes:
        on_untrained: What predict() does without both classes trained.
                      - "fallback": Return a fixed label (never fails)
                      - "raise": Raise ModelNotTrainedError
        single_class_label: Label returned by a model that only saw spam.
                            - "ham": Always fall back to ham
                            - "observed": Return the one class it saw
    """
    on_untrained: str = "fallback"      # "fallback" or "raise"
    single_class_label: str = "ham"     # "ham" or "observed"

    @property
    def strict(self) -> bool:
        return self.on_untrained == "raise"

    @property
    def prefer_observed_class(self) -> bool:
        return self.single_class_label == "observed"


@dataclass
class EvaluationConfig:
    """
    Configuration for the held-out evaluation.

    Attributes:
        train_fraction: Share of the shuffled corpus used for training.
        seed: Shuffle seed. None gives a different split every run.
    """
    train_fraction: float = 0.8
    seed: int | None = None


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP classification endpoint.

    Attributes:
        host: Interface to bind.
        port: TCP port to listen on.
    """
    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class Config:
    """
    Main configuration container for SpamSift.

    Attributes:
        corpus: Training corpus settings.
        model: Classifier settings.
        evaluation: Train/test split settings.
        server: HTTP endpoint settings.

    Usage:
        >>> config = Config.load()
        >>> config.server.port
        8080
    """
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the config file doesn't exist, returns default configuration.

        Args:
            path: Config file to read. Uses the XDG location if None.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> Path:
        """
        Save configuration to a config file.

        Creates the parent directory if it doesn't exist.

        Returns:
            The path written to.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

        return config_path

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Raises:
            ConfigError: If a value is out of range or of the wrong kind.
        """
        config = cls()

        # Corpus settings
        corpus = data.get("corpus", {})
        config.corpus = CorpusConfig(
            path=str(corpus.get("path", "spam_ham_dataset.csv")),
            encoding=corpus.get("encoding", "utf-8"),
            encoding_errors=corpus.get("encoding_errors", "replace"),
        )

        # Model settings
        model = data.get("model", {})
        config.model = ModelConfig(
            on_untrained=model.get("on_untrained", "fallback"),
            single_class_label=model.get("single_class_label", "ham"),
        )

        # Evaluation settings
        evaluation = data.get("evaluation", {})
        config.evaluation = EvaluationConfig(
            train_fraction=evaluation.get("train_fraction", 0.8),
            seed=evaluation.get("seed"),
        )

        # Server settings
        server = data.get("server", {})
        config.server = ServerConfig(
            host=server.get("host", "127.0.0.1"),
            port=server.get("port", 8080),
        )

        config.validate()
        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        data: dict[str, Any] = {}

        data["corpus"] = {
            "path": self.corpus.path,
            "encoding": self.corpus.encoding,
            "encoding_errors": self.corpus.encoding_errors,
        }

        data["model"] = {
            "on_untrained": self.model.on_untrained,
            "single_class_label": self.model.single_class_label,
        }

        # TOML has no null, so an unset seed is simply left out
        data["evaluation"] = {"train_fraction": self.evaluation.train_fraction}
        if self.evaluation.seed is not None:
            data["evaluation"]["seed"] = self.evaluation.seed

        data["server"] = {
            "host": self.server.host,
            "port": self.server.port,
        }

        return data

    def validate(self) -> None:
        """
        Check that every setting holds a legal value.

        Raises:
            ConfigError: On the first invalid setting.
        """
        try:
            codecs.lookup(self.corpus.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigError(f"corpus.encoding is not a known codec: {self.corpus.encoding!r}") from e
        try:
            codecs.lookup_error(self.corpus.encoding_errors)
        except (LookupError, TypeError) as e:
            raise ConfigError(
                f"corpus.encoding_errors is not a known error handler: {self.corpus.encoding_errors!r}"
            ) from e

        if self.model.on_untrained not in ("fallback", "raise"):
            raise ConfigError(
                f"model.on_untrained must be 'fallback' or 'raise', got {self.model.on_untrained!r}"
            )
        if self.model.single_class_label not in ("ham", "observed"):
            raise ConfigError(
                "model.single_class_label must be 'ham' or 'observed', "
                f"got {self.model.single_class_label!r}"
            )

        fraction = self.evaluation.train_fraction
        if isinstance(fraction, bool) or not isinstance(fraction, (int, float)) \
                or not 0.0 < fraction < 1.0:
            raise ConfigError(f"evaluation.train_fraction must be between 0 and 1, got {fraction!r}")
        if self.evaluation.seed is not None and not isinstance(self.evaluation.seed, int):
            raise ConfigError(f"evaluation.seed must be an integer, got {self.evaluation.seed!r}")

        port = self.server.port
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            raise ConfigError(f"server.port must be between 1 and 65535, got {port!r}")


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """
    Print configuration paths for debugging.
    Useful for users wondering where their config is stored.
    """
    print(f"Config:       {get_xdg_config_home()}")
    print(f"Config file:  {Config.config_file_path()}")
