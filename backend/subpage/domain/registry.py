from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from flask import current_app
from werkzeug.utils import import_string

# handler(instance_id, context) -> bool; False means the instance was not deleted
ModuleDeletionHandler = Callable[[str, "DeletionContext"], bool]

# namer(course, section) -> display name
SectionNamer = Callable[[Any, Any], str]


@dataclass(frozen=True)
class DeletionContext:
    """Collaborators handed to module deletion handlers."""
    session: Any
    actor_id: Optional[str]
    registry: "SubpageRegistry"


class ModuleHandlerRegistry:
    """Maps a module type (course module ``modname``) to its deletion handler."""

    def __init__(self):
        self._handlers: Dict[str, ModuleDeletionHandler] = {}

    def register(self, modname: str, handler: ModuleDeletionHandler | None = None):
        if handler is not None:
            self._handlers[modname] = handler
            return handler

        def decorator(fn):
            self._handlers[modname] = fn
            return fn
        return decorator

    def get(self, modname: str) -> ModuleDeletionHandler | None:
        return self._handlers.get(modname)

    def __contains__(self, modname):
        return modname in self._handlers


class SectionNamingRegistry:
    """Maps a course format to the callback naming its sections."""

    def __init__(self):
        self._namers: Dict[str, SectionNamer] = {}

    def register(self, course_format: str, namer: SectionNamer):
        self._namers[course_format] = namer
        return namer

    def get(self, course_format: str) -> SectionNamer | None:
        return self._namers.get(course_format)

    def section_name(self, course, section, number=None) -> str:
        namer = self.get(course.format)
        if namer is not None:
            return namer(course, section)
        return default_section_name(section, number)


def default_section_name(section, number=None) -> str:
    if section.name:
        return section.name
    return f"Section {section.section if number is None else number}"


@dataclass
class SubpageRegistry:
    modules: ModuleHandlerRegistry = field(default_factory=ModuleHandlerRegistry)
    naming: SectionNamingRegistry = field(default_factory=SectionNamingRegistry)

    @classmethod
    def from_config(cls, config) -> "SubpageRegistry":
        """
        Build the registries from dotted import paths in the app config, e.g.
        ``SUBPAGE_MODULE_HANDLERS = {"forum": "myplugin.forum:delete_instance"}``.
        """
        registry = cls()
        for modname, path in (config.get("SUBPAGE_MODULE_HANDLERS") or {}).items():
            registry.modules.register(modname, _resolve(path))
        for course_format, path in (config.get("SUBPAGE_SECTION_NAMERS") or {}).items():
            registry.naming.register(course_format, _resolve(path))
        return registry


def _resolve(target):
    if callable(target):
        return target
    return import_string(target.replace(":", "."))


def current_registry() -> SubpageRegistry:
    """The registries resolved for the running app in ``create_app``."""
    return current_app.extensions["subpage"]
