"""
Language profiles and command templates.

A fixed table describes how to recognize, optionally compile and run a
program for each supported language. Commands are stored as templates of
literal fragments and substitution slots, resolved against a Project.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from .config import COMPILED_EXECUTABLE_NAME, DEFAULT_BUILD_DIR
from .errors import MixedLanguageError


class Slot(Enum):
    """Placeholders that are filled in when a command is resolved."""

    ENTRY_FILE = "entry_file"
    ENTRY_CLASS = "entry_class"
    ENTRY_DIR = "entry_dir"
    SOURCES = "sources"
    EXECUTABLE = "executable"


Fragment = Union[str, Slot]
CommandTemplate = tuple[Fragment, ...]


@dataclass(frozen=True)
class LanguageProfile:
    """Static description of one supported language."""

    name: str
    extensions: tuple[str, ...]
    run_command: CommandTemplate
    compile_command: Optional[CommandTemplate] = None

    @property
    def needs_compilation(self) -> bool:
        return self.compile_command is not None

    def matches(self, path: str) -> bool:
        return PurePosixPath(path).suffix.lower() in self.extensions


@dataclass(frozen=True)
class Project:
    """
    A resolved student program: its language, entry point and sources.

    Attributes:
        profile: Language profile of the push.
        entry_file: Path to the entry point source file.
        sources: Every relevant changed source file, entry point included.
        build_dir: Directory receiving compiled output.
    """

    profile: LanguageProfile
    entry_file: Path
    sources: tuple[Path, ...]
    build_dir: Path = DEFAULT_BUILD_DIR

    @property
    def entry_basename(self) -> str:
        return self.entry_file.name

    @property
    def entry_class_name(self) -> str:
        return self.entry_file.stem

    @property
    def executable(self) -> Path:
        # Absolute, so it is never looked up on PATH
        return (self.build_dir / COMPILED_EXECUTABLE_NAME).resolve()


@dataclass(frozen=True)
class Detection:
    """Outcome of language detection over the changed files."""

    profile: LanguageProfile
    candidates: tuple[str, ...]


PYTHON = LanguageProfile(
    name="Python",
    extensions=(".py",),
    run_command=("python3", Slot.ENTRY_FILE),
)

JAVA = LanguageProfile(
    name="Java",
    extensions=(".java",),
    compile_command=("javac", Slot.SOURCES),
    run_command=("java", "-cp", Slot.ENTRY_DIR, Slot.ENTRY_CLASS),
)

CPP = LanguageProfile(
    name="C++",
    extensions=(".cpp",),
    compile_command=("g++", Slot.SOURCES, "-o", Slot.EXECUTABLE, "-std=c++17"),
    run_command=(Slot.EXECUTABLE,),
)

LANGUAGE_PROFILES: Mapping[str, LanguageProfile] = MappingProxyType(
    {profile.name: profile for profile in (PYTHON, JAVA, CPP)}
)


def profile_for_file(
    path: str, profiles: Sequence[LanguageProfile] | None = None
) -> LanguageProfile | None:
    """Return the profile whose extension matches path, if any."""
    for profile in profiles if profiles is not None else LANGUAGE_PROFILES.values():
        if profile.matches(path):
            return profile
    return None


def detect_language(
    changed_files: Sequence[str],
    profiles: Sequence[LanguageProfile] | None = None,
) -> Detection | None:
    """
    Detect the single language of a push.

    Args:
        changed_files: Repository-relative paths of added/modified files.
        profiles: Profiles to match against (default: all supported).

    Returns:
        Detection with the profile and its candidate files, or None when no
        changed file belongs to a supported language.

    Raises:
        MixedLanguageError: If the files span more than one language.
    """
    by_language: dict[str, list[str]] = {}
    matched: dict[str, LanguageProfile] = {}

    for path in changed_files:
        profile = profile_for_file(path, profiles)
        if profile is None:
            continue
        matched[profile.name] = profile
        by_language.setdefault(profile.name, []).append(path)

    if not by_language:
        return None
    if len(by_language) > 1:
        raise MixedLanguageError(sorted(by_language))

    name, candidates = next(iter(by_language.items()))
    return Detection(profile=matched[name], candidates=tuple(candidates))


def resolve_command(template: CommandTemplate, project: Project) -> list[str]:
    """
    Expand a command template into an argument list.

    Args:
        template: Literal fragments and slots.
        project: Project supplying the slot values.

    Returns:
        Argument vector ready for subprocess.
    """
    args: list[str] = []
    for fragment in template:
        if isinstance(fragment, str):
            args.append(fragment)
        elif fragment is Slot.ENTRY_FILE:
            args.append(str(project.entry_file))
        elif fragment is Slot.ENTRY_CLASS:
            args.append(project.entry_class_name)
        elif fragment is Slot.ENTRY_DIR:
            args.append(str(project.entry_file.parent))
        elif fragment is Slot.SOURCES:
            args.extend(str(source) for source in project.sources)
        elif fragment is Slot.EXECUTABLE:
            args.append(str(project.executable))
        else:
            raise ValueError(f"Unknown command fragment: {fragment!r}")
    return args
