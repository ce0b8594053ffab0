"""
Data provider for data-driven tests.

This module expands a single test body into one named test group per
dataset entry. A dataset is either a mapping of label to value(s) or a
plain sequence of values, which is labelled by each value's string form.

Registration happens synchronously while ``with_data`` runs, so every
group is visible to the test runner's collection phase. Data created in
setup hooks (fixtures, ``setup_method`` and the like) is therefore not
available to the dataset itself, only to the tests declared inside the
groups.

Example:
    >>> registry = GroupRegistry()
    >>> groups = with_data({"low": 1, "high": [2, 3]}, print, registry)
    >>> registry.labels
    ['with low', 'with high']
"""

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

from spechelpers.models import (
    DataGroup,
    Dataset,
    GroupBody,
    KeyedDataset,
    ListedDataset,
    NamedDataset,
    RegisterGroup,
    is_dataset_sequence,
)

logger = logging.getLogger(__name__)

INVALID_DATASET_MESSAGE = "First argument must be an object or non-empty array."


class InvalidArgumentError(ValueError):
    """Raised when with_data receives a dataset or test body it cannot use."""


def create_named_dataset(items: Sequence) -> Dict[str, Any]:
    """
    Convert a sequence into a mapping keyed by each item's string form.

    This normalizes a listed dataset so the rest of the data provider can
    assume a mapping. If several items share a string form, only the last
    of them is kept.

    Args:
        items: The sequence to convert

    Returns:
        Mapping of str(item) to item

    Examples:
        >>> create_named_dataset(["foo", "bar"])
        {'foo': 'foo', 'bar': 'bar'}
        >>> create_named_dataset([1, "1"])
        {'1': '1'}
    """
    result: Dict[str, Any] = {}
    for item in items:
        name = str(item)
        if name in result:
            logger.debug(f"Dataset label collision for '{name}', keeping the last value")
        result[name] = item
    return result


def to_dataset(dataset: Any) -> Dataset:
    """
    Classify caller input as a keyed or a listed dataset.

    Raises:
        InvalidArgumentError: If the input is None, not a mapping or
            sequence, or an empty sequence
    """
    if isinstance(dataset, Mapping):
        return KeyedDataset(dataset)
    if is_dataset_sequence(dataset):
        if not len(dataset):
            raise InvalidArgumentError(INVALID_DATASET_MESSAGE)
        return ListedDataset(dataset)
    raise InvalidArgumentError(INVALID_DATASET_MESSAGE)


def resolve_dataset(dataset: Dataset) -> NamedDataset:
    """
    Resolve either dataset variant into the canonical named form.

    Raises:
        InvalidArgumentError: If two keys of a keyed dataset have the same
            string form, e.g. 1 and "1"
    """
    if isinstance(dataset, KeyedDataset):
        label_counts = Counter(str(name) for name in dataset.entries)
        duplicates = [label for label, count in label_counts.items() if count > 1]
        if duplicates:
            raise InvalidArgumentError(f"Dataset keys must have distinct labels, duplicated: {', '.join(duplicates)}")
        return NamedDataset.from_mapping(dataset.entries)
    return NamedDataset.from_mapping(create_named_dataset(dataset.items))


def normalize_dataset(dataset: Any) -> NamedDataset:
    """
    Validate caller input and return its named dataset.

    This is the normalization step of with_data without the registration,
    useful for inspecting how a dataset will be expanded.
    """
    return resolve_dataset(to_dataset(dataset))


def _make_group_body(test_body: Callable[..., Any], args: Tuple[Any, ...]) -> GroupBody:
    def body() -> Any:
        return test_body(*args)

    return body


def with_data(dataset: Any, test_body: Callable[..., Any], register_group: RegisterGroup) -> List[DataGroup]:
    """
    Register one test group per dataset entry.

    Each group is labelled "with <name>" and, when the test runner executes
    it, calls test_body with the entry's arguments spread positionally.
    Mapping values that are lists or tuples are spread; other values are
    passed as a single argument. Groups are registered in dataset order,
    all of them before this function returns.

    Args:
        dataset: A mapping of name to value(s), or a non-empty sequence
        test_body: Callable invoked once per entry
        register_group: Group-declaration primitive, called as
            register_group(label, body)

    Returns:
        The registered groups, in registration order

    Raises:
        InvalidArgumentError: If the dataset is missing, not a mapping or
            sequence, an empty sequence, a mapping whose keys share a
            string form, or test_body is not callable
    """
    named = normalize_dataset(dataset)
    if not callable(test_body):
        raise InvalidArgumentError("Second argument must be a callable test body.")

    groups = [DataGroup(name=name, args=args) for name, args in named.items()]
    for group in groups:
        register_group(group.label, _make_group_body(test_body, group.args))

    logger.debug(f"Registered {len(groups)} data groups for {getattr(test_body, '__name__', test_body)!r}")
    return groups


class DataProvider:
    """
    Data provider bound to a specific group-declaration primitive.

    Args:
        register_group: Callable used to declare each test group
    """

    def __init__(self, register_group: RegisterGroup) -> None:
        self.register_group = register_group

    def with_data(self, dataset: Any, test_body: Callable[..., Any]) -> List[DataGroup]:
        """Register one group per dataset entry. See the module-level with_data."""
        return with_data(dataset, test_body, self.register_group)

    __call__ = with_data


class GroupRegistry:
    """
    In-memory group-declaration primitive.

    Records groups as they are declared without running them. Bodies run
    only when run() is called, mirroring a test runner's separate
    execution phase.
    """

    def __init__(self) -> None:
        self._groups: List[Tuple[str, GroupBody]] = []

    def register_group(self, label: str, body: GroupBody) -> None:
        self._groups.append((label, body))

    __call__ = register_group

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self._groups]

    @property
    def groups(self) -> List[Tuple[str, GroupBody]]:
        return list(self._groups)

    def run(self) -> List[Any]:
        """Run every registered group body in order and return their results."""
        results = []
        for label, body in self._groups:
            logger.debug(f"Running group '{label}'")
            results.append(body())
        return results

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Tuple[str, GroupBody]]:
        return iter(self._groups)
