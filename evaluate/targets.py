"""
Evaluation targets and structural introspection.

A target is either Work (a zero-argument callable, measured by invoking it)
or a Value (any other object, measured by copying it and inspecting its
shape).
"""

import inspect
import dataclasses
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol, runtime_checkable


class TargetKind(Enum):
    """How a target is measured."""
    WORK = "work"
    VALUE = "value"


class EvaluationMode(Enum):
    """Mode of a complete measurement."""
    WORK = "work"
    VALUE = "value"
    PROCESS = "process"


@runtime_checkable
class Introspectable(Protocol):
    """Objects that report their own structural counts."""
    
    def field_count(self) -> int:
        ...
    
    def method_count(self) -> int:
        ...


# Types measured as plain scalars: no members, no elements
SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes, bytearray)


@dataclass(frozen=True)
class EvaluationTarget:
    """
    A single unit to evaluate.
    
    Attributes:
        subject: The callable or value supplied by the caller
        kind: Whether the subject is invoked or inspected
        index: Position in the target list
    """
    subject: Any
    kind: TargetKind
    index: int = 0
    
    @classmethod
    def classify(cls, subject: Any, index: int = 0) -> "EvaluationTarget":
        """Classify a subject as Work if it is callable, otherwise as a Value."""
        kind = TargetKind.WORK if callable(subject) else TargetKind.VALUE
        return cls(subject=subject, kind=kind, index=index)
    
    @property
    def is_work(self) -> bool:
        return self.kind == TargetKind.WORK
    
    @property
    def name(self) -> str:
        """Human-readable name for logs and tables."""
        if self.is_work:
            qualname = getattr(self.subject, "__qualname__", None)
            if qualname:
                return qualname
        return f"{type(self.subject).__name__}#{self.index}"


def wrap_targets(targets: Any) -> List[EvaluationTarget]:
    """
    Normalize caller input into a list of classified targets.
    
    None means no targets (process mode), a list is the target list itself,
    and anything else is a single target.
    """
    if targets is None:
        return []
    if not isinstance(targets, list):
        targets = [targets]
    return [EvaluationTarget.classify(subject, i) for i, subject in enumerate(targets)]


def is_collection(value: Any) -> bool:
    """Sized, iterable containers; text and byte strings are scalars."""
    return isinstance(value, Collection) and not isinstance(value, SCALAR_TYPES)


def is_object_like(value: Any) -> bool:
    """Structured objects carrying named members of their own."""
    if isinstance(value, SCALAR_TYPES):
        return False
    if isinstance(value, Introspectable) or dataclasses.is_dataclass(value):
        return True
    # Containers such as OrderedDict or UserList are measured by their elements
    if is_collection(value):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def count_elements(value: Any) -> Optional[int]:
    """Element count of a collection, None for anything else."""
    if not is_collection(value):
        return None
    return len(value)


def count_properties(value: Any) -> Optional[int]:
    """Number of data members of an object-like value, None otherwise."""
    if not is_object_like(value):
        return None
    if isinstance(value, Introspectable):
        return value.field_count()
    if dataclasses.is_dataclass(value):
        return len(dataclasses.fields(value))
    
    members = [
        key for key, member in getattr(value, "__dict__", {}).items()
        if not inspect.isroutine(member)
    ]
    members.extend(
        slot for slot in _slot_names(type(value))
        if slot not in members and hasattr(value, slot)
    )
    return len(members)


def count_methods(value: Any) -> Optional[int]:
    """Number of public methods of an object-like value, None otherwise."""
    if not is_object_like(value):
        return None
    if isinstance(value, Introspectable):
        return value.method_count()
    
    return sum(
        1 for name, _ in inspect.getmembers(type(value), inspect.isroutine)
        if not name.startswith("_")
    )


def _slot_names(klass: type) -> List[str]:
    names = []
    for base in klass.__mro__:
        slots = base.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names
