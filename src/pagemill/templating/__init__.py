"""Template composition: stores, directive parsing, inheritance, includes,
interpolation, and syntax protection."""

from pagemill.templating.includes import resolve_includes
from pagemill.templating.inheritance import InheritanceResolver
from pagemill.templating.interpolate import interpolate
from pagemill.templating.protect import protect, restore
from pagemill.templating.store import DictStore, FileSystemStore, TemplateStore

__all__ = [
    "DictStore",
    "FileSystemStore",
    "InheritanceResolver",
    "TemplateStore",
    "interpolate",
    "protect",
    "resolve_includes",
    "restore",
]
