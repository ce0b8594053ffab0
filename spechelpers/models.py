"""
Data models for spec helpers.

This module provides the dataset variants accepted by the data provider,
the canonical named dataset they resolve to, the record of a registered
test group, and the window size model used by the DOM utilities.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Tuple, Union

from pydantic import BaseModel, Field

# Prefix put in front of every data group label
GROUP_LABEL_PREFIX = "with "

# Signature of an injected group-declaration primitive: register_group(label, body)
GroupBody = Callable[[], Any]
RegisterGroup = Callable[[str, GroupBody], Any]


def as_arguments(value: Any) -> Tuple[Any, ...]:
    """
    Convert a dataset value into a positional argument tuple.

    Lists and tuples are spread as-is. Any other value, including strings
    and dictionaries, becomes a one-element argument tuple.

    Examples:
        >>> as_arguments([2, 3])
        (2, 3)
        >>> as_arguments("foo")
        ('foo',)
    """
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def is_dataset_sequence(value: Any) -> bool:
    """Return True for sequences that may be used as a listed dataset."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


@dataclass(frozen=True)
class NamedDataset:
    """
    Canonical, label-keyed form of a dataset.

    Every entry maps a string name to the tuple of positional arguments
    the test body receives. Entry order is the order groups get registered in.

    Attributes:
        entries: Ordered mapping of name to argument tuple
    """
    entries: Dict[str, Tuple[Any, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> 'NamedDataset':
        """Build a named dataset from a mapping of name to value(s)."""
        return cls({str(name): as_arguments(value) for name, value in mapping.items()})

    def names(self) -> List[str]:
        """Return the entry names in registration order."""
        return list(self.entries)

    def items(self) -> Iterator[Tuple[str, Tuple[Any, ...]]]:
        return iter(self.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __getitem__(self, name: str) -> Tuple[Any, ...]:
        return self.entries[name]


@dataclass(frozen=True)
class KeyedDataset:
    """A dataset given as a mapping of label to a value or a list of values."""
    entries: Mapping


@dataclass(frozen=True)
class ListedDataset:
    """
    A dataset given as a plain, non-empty sequence of values.

    Each value is labelled by its string representation. Values whose
    string representations collide are collapsed, keeping the last one.
    """
    items: Sequence


Dataset = Union[KeyedDataset, ListedDataset]


@dataclass(frozen=True)
class DataGroup:
    """
    Record of a test group registered for one dataset entry.

    Attributes:
        name: The entry name within the named dataset
        args: Positional arguments passed to the test body
    """
    name: str
    args: Tuple[Any, ...]

    @property
    def label(self) -> str:
        """The group label as shown by the test runner, e.g. 'with foo'."""
        return f"{GROUP_LABEL_PREFIX}{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {'label': self.label, 'name': self.name, 'args': list(self.args)}


class WindowSize(BaseModel):
    """
    Width and height of a browser window's document element, in CSS pixels.

    Examples:
        >>> WindowSize(width=800, height=600).as_dict()
        {'width': 800, 'height': 600}
    """
    width: int = Field(ge=0)
    height: int = Field(ge=0)

    @property
    def is_empty(self) -> bool:
        """True when either dimension is zero, e.g. while a window is still opening."""
        return self.width == 0 or self.height == 0

    def as_dict(self) -> Dict[str, int]:
        return {'width': self.width, 'height': self.height}
