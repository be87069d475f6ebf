"""
Supported languages and their toolchains.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from .exceptions import UnsupportedLanguageError


class Language(Enum):
    """Languages the sandbox can compile and run."""
    C = "c"
    CPP = "cpp"
    RUST = "rust"
    GO = "go"

    @classmethod
    def parse(cls, value: Union["Language", str]) -> "Language":
        """Resolve a language from an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnsupportedLanguageError(f"Unsupported language: {value}")

    @property
    def profile(self) -> "LanguageProfile":
        return LANGUAGE_PROFILES[self]


@dataclass(frozen=True)
class LanguageProfile:
    """How one language is written to disk and compiled."""
    extension: str
    image: str
    compiler: Tuple[str, ...]

    @property
    def source_name(self) -> str:
        return f"input.{self.extension}"


LANGUAGE_PROFILES: Dict[Language, LanguageProfile] = {
    Language.C: LanguageProfile("c", "sandbox-c", ("clang",)),
    Language.CPP: LanguageProfile("cpp", "sandbox-cpp", ("clang++",)),
    Language.RUST: LanguageProfile("rs", "sandbox-rust", ("rustc",)),
    Language.GO: LanguageProfile("go", "sandbox-go", ("go", "build")),
}

_ALIASES: Dict[str, Language] = {
    "c": Language.C,
    "cpp": Language.CPP,
    "c++": Language.CPP,
    "cxx": Language.CPP,
    "rust": Language.RUST,
    "rs": Language.RUST,
    "go": Language.GO,
    "golang": Language.GO,
}

ARTIFACT_NAME = "output"
