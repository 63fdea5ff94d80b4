"""
Field presence for desired and tracked settings.

Every setting holds one of three variants:

    ABSENT     never declared; never sent to the remote API, never diffed
    EMPTY      a list setting declared with zero elements
    Value(v)   explicitly set

The remote API normalizes an undeclared list to [], so collapsing ABSENT
and EMPTY produces a perpetual diff. The merge helpers below are the only
place where remote values flow into a tracked document.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class Absent:
    """Marker for a setting the user never declared"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    def __reduce__(self):
        return (Absent, ())


class Empty:
    """Marker for a list setting declared with no elements"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    def __reduce__(self):
        return (Empty, ())


ABSENT = Absent()
EMPTY = Empty()


@dataclass(frozen=True)
class Value(Generic[T]):
    value: T


Setting = Union[Absent, Empty, Value]

# Setting kinds, used for input validation and schema declaration
STRING = "string"
INT = "int"
BOOL = "bool"
STRING_LIST = "list"


def is_present(setting: Setting) -> bool:
    return not isinstance(setting, Absent)


def value_of(setting: Setting, default: Any = None) -> Any:
    """Unwrap a setting: Value -> value, EMPTY -> [], ABSENT -> default"""
    if isinstance(setting, Value):
        return setting.value
    if isinstance(setting, Empty):
        return []
    return default


def from_raw(raw: Any, is_list: bool = False) -> Setting:
    """
    Convert a plain JSON value into a setting.

    None means ABSENT. For list settings, [] means EMPTY.
    """
    if raw is None:
        return ABSENT
    if is_list:
        items = list(raw)
        return Value(items) if items else EMPTY
    return Value(raw)


def to_raw(setting: Setting) -> Any:
    """Inverse of from_raw; ABSENT becomes None"""
    if isinstance(setting, Value):
        return list(setting.value) if isinstance(setting.value, list) else setting.value
    if isinstance(setting, Empty):
        return []
    return None


def merge_scalar(
    current: Setting,
    remote: Any,
    write_only: bool = False,
    populate: bool = False,
) -> Setting:
    """
    Merge a remote scalar into a tracked setting.

    Write-only settings keep their declared value since the remote never
    returns them. A missing remote value keeps the tracked value. An
    undeclared setting stays ABSENT unless populate is set (import).
    """
    if write_only or remote is None:
        return current
    if isinstance(current, Absent) and not populate:
        return current
    return Value(remote)


def merge_list(current: Setting, remote: Optional[List[Any]], populate: bool = False) -> Setting:
    """
    Merge a remote list into a tracked list setting.

    An undeclared list stays ABSENT even when the remote reports []. A
    declared list becomes EMPTY when the remote reports nothing. On import,
    only non-empty remote lists are recorded.
    """
    items = list(remote) if remote else []
    if isinstance(current, Absent):
        if populate and items:
            return Value(items)
        return ABSENT
    return Value(items) if items else EMPTY


def setting(
    kind: str,
    description: str = "",
    wire: Optional[str] = None,
    write_only: bool = False,
    to_wire: Optional[Callable[[Any], Any]] = None,
    from_wire: Optional[Callable[[Any], Any]] = None,
):
    """Declare a settings field; defaults to ABSENT"""
    return field(
        default=ABSENT,
        metadata={
            "kind": kind,
            "description": description,
            "wire": wire,
            "write_only": write_only,
            "to_wire": to_wire,
            "from_wire": from_wire,
        },
    )


def block(
    block_cls: type,
    description: str = "",
    wire: Optional[str] = None,
    prefix: Optional[str] = None,
):
    """
    Declare an optional nested block; defaults to None (absent).

    With wire, the block is a nested object on the wire. With prefix, its
    settings are flattened to <prefix>_<name> on the wire.
    """
    return field(
        default=None,
        metadata={
            "block": block_cls,
            "description": description,
            "wire": wire,
            "prefix": prefix,
        },
    )


def part(part_cls: type):
    """Declare a composed part whose settings are flattened into the parent"""
    return field(default_factory=part_cls, metadata={"part": part_cls})
