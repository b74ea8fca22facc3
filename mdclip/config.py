# mdclip/config.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from mdclip.errors import ConfigError

APP_NAME = "mdclip"
APP_AUTHOR = "mdclip"

# Settings files
USER_SETTINGS_FILENAME = "settings.json"
PROJECT_SETTINGS_FILENAME = ".mdclip.json"
GITIGNORE_FILENAME = ".gitignore"

EXCLUDED_DIRECTORIES_DEFAULT = {
    ".git",
    "node_modules",
    "out",
}

# Extensions that are always rendered as text, whatever the bytes look like
TEXT_FILE_EXTENSIONS = {
    # Source
    ".py", ".pyi", ".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".java", ".kt", ".kts",
    ".c", ".h", ".cpp", ".hpp", ".cc", ".cs", ".go", ".rs", ".rb", ".php", ".swift",
    ".scala", ".lua", ".r", ".m", ".dart", ".vue", ".svelte",
    # Shell
    ".sh", ".bash", ".zsh", ".ps1", ".bat", ".cmd",
    # Markup/data
    ".md", ".markdown", ".rst", ".txt", ".html", ".htm", ".css", ".scss", ".less",
    ".json", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf", ".xml", ".csv", ".sql",
    ".log", ".lock", ".env",
}

# Known binary file extensions
BINARY_FILE_EXTENSIONS = {
    # Compiled/Object files
    ".pyc", ".pyo", ".pyd", ".o", ".a", ".so", ".lib", ".dll", ".exe", ".dylib", ".obj",
    ".class", ".wasm", ".bin",
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".tif", ".tiff", ".svg", ".webp",
    # Archives
    ".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz", ".jar",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Audio/Video
    ".mp3", ".wav", ".flac", ".mp4", ".mov", ".avi", ".mkv", ".webm",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2",
    # Other
    ".db", ".sqlite", ".sqlite3", ".dat",
}

CONTROL_CHAR_RATIO_DEFAULT = 0.3
MAX_CHARACTERS_DEFAULT = 400_000
MAX_FILES_DEFAULT = 50


def normalize_extension(ext: str) -> str:
    """'PNG', '.png' and 'png' all become '.png'."""
    ext = (ext or "").strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def _extension_set(values: Iterable[str]) -> frozenset:
    return frozenset(e for e in (normalize_extension(v) for v in values) if e)


@dataclass(frozen=True)
class ClassificationConfig:
    text_extensions: frozenset = field(default_factory=lambda: _extension_set(TEXT_FILE_EXTENSIONS))
    binary_extensions: frozenset = field(default_factory=lambda: _extension_set(BINARY_FILE_EXTENSIONS))
    excluded_directories: frozenset = field(default_factory=lambda: frozenset(EXCLUDED_DIRECTORIES_DEFAULT))
    null_byte_check: bool = True
    control_char_check: bool = True
    control_char_ratio: float = CONTROL_CHAR_RATIO_DEFAULT


@dataclass(frozen=True)
class LimitPolicy:
    max_characters: int = MAX_CHARACTERS_DEFAULT
    max_files: int = MAX_FILES_DEFAULT


@dataclass(frozen=True)
class CopyConfig:
    """
    Everything one copy operation needs to know, fixed for its duration.

    Build it with ``CopyConfig.from_mapping`` from settings keys (the same
    camelCase names the editor settings use) and call ``validate`` before
    the operation starts.
    """
    use_gitignore: bool = True
    relative_paths: bool = False
    classification: ClassificationConfig = field(default_factory=ClassificationConfig)
    limits: LimitPolicy = field(default_factory=LimitPolicy)

    def validate(self) -> "CopyConfig":
        ratio = self.classification.control_char_ratio
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not 0.0 <= ratio <= 1.0:
            raise ConfigError(f"controlCharRatio must be a number between 0 and 1, got {ratio!r}")
        for name, value in (("maxCharacters", self.limits.max_characters), ("maxFiles", self.limits.max_files)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        return self

    def merged(self, settings: Mapping[str, Any]) -> "CopyConfig":
        """Return a copy with the given settings keys applied on top."""
        cls_kwargs: dict[str, Any] = {}
        lim_kwargs: dict[str, Any] = {}
        top_kwargs: dict[str, Any] = {}

        for key, value in settings.items():
            if value is None:
                continue
            if key == "useGitignore":
                top_kwargs["use_gitignore"] = _as_bool(key, value)
            elif key == "relativePaths":
                top_kwargs["relative_paths"] = _as_bool(key, value)
            elif key == "excludeDirectories":
                cls_kwargs["excluded_directories"] = frozenset(_as_list(key, value))
            elif key == "knownTextExtensions":
                cls_kwargs["text_extensions"] = _extension_set(_as_list(key, value))
            elif key == "knownBinaryExtensions":
                cls_kwargs["binary_extensions"] = _extension_set(_as_list(key, value))
            elif key == "nullByteCheck":
                cls_kwargs["null_byte_check"] = _as_bool(key, value)
            elif key == "controlCharCheck":
                cls_kwargs["control_char_check"] = _as_bool(key, value)
            elif key == "controlCharRatio":
                cls_kwargs["control_char_ratio"] = value
            elif key == "maxCharacters":
                lim_kwargs["max_characters"] = value
            elif key == "maxFiles":
                lim_kwargs["max_files"] = value
            else:
                raise ConfigError(f"Unknown setting: {key}")

        return replace(
            self,
            classification=replace(self.classification, **cls_kwargs),
            limits=replace(self.limits, **lim_kwargs),
            **top_kwargs,
        )

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any] | None = None) -> "CopyConfig":
        return cls().merged(settings or {})


SETTINGS_KEYS = (
    "useGitignore",
    "relativePaths",
    "excludeDirectories",
    "knownTextExtensions",
    "knownBinaryExtensions",
    "nullByteCheck",
    "controlCharCheck",
    "controlCharRatio",
    "maxCharacters",
    "maxFiles",
)


def _as_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _as_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return [str(v) for v in value]
