from dataclasses import dataclass, asdict


class SubpageError(Exception):
    """Base class for errors raised by subpage operations."""


class NotFoundError(SubpageError):
    """A subpage, course module, course or section lookup missed."""


class CapacityExceededError(SubpageError):
    """No section number is left in the subpage band."""


class InvariantViolation(SubpageError):
    pass


@dataclass(frozen=True)
class ModuleDeletionWarning:
    """
    A non-fatal failure while deleting a course module.

    step is one of "handler", "instance", "files", "coursemodule", "sequence".
    """
    cmid: str
    modname: str
    step: str
    message: str

    def to_dict(self):
        return asdict(self)
