"""
Describe/it style test groups for pytest.

pytest has no group-declaration primitive of its own, so this module maps
each declared group onto a test class and each test onto a test function
of that class. Classes are installed into a module namespace, normally the
test module's ``globals()``, while the module is being imported, so pytest
collects them like hand-written classes.

Example:
    suite = Suite(globals())

    def squares(value, expected):
        @suite.it("squares the value")
        def _():
            assert value ** 2 == expected

    suite.with_data({"two": [2, 4], "three": [3, 9]}, squares)

This defines ``TestWithTwo`` and ``TestWithThree``, each with a
``test_squares_the_value`` test.
"""

import logging
import re
from typing import Any, Callable, Dict, List, MutableMapping, Optional

from spechelpers.dataprovider import with_data
from spechelpers.models import DataGroup, GroupBody

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"\W+")


class SuiteError(RuntimeError):
    """Raised when a test or group is declared in the wrong place."""


def class_name_for(label: str) -> str:
    """
    Derive a pytest-collectable class name from a group label.

    Examples:
        >>> class_name_for("with foo bar")
        'TestWithFooBar'
        >>> class_name_for("with [1, 2]")
        'TestWith12'
    """
    words = [word for word in _NON_WORD.split(label) if word]
    return "Test" + "".join(word[:1].upper() + word[1:] for word in words)


def method_name_for(description: str) -> str:
    """
    Derive a pytest-collectable function name from a test description.

    Examples:
        >>> method_name_for("squares the value")
        'test_squares_the_value'
    """
    words = [word for word in _NON_WORD.split(description.lower()) if word]
    return "_".join(["test"] + words)


def _unique(name: str, taken: MutableMapping[str, Any]) -> str:
    candidate = name
    counter = 2
    while candidate in taken:
        candidate = f"{name}_{counter}"
        counter += 1
    return candidate


class _Group:
    def __init__(self, label: str) -> None:
        self.label = label
        self.attrs: Dict[str, Any] = {'__doc__': label, 'label': label}


class Suite:
    """
    Declares pytest test classes from describe/it calls.

    Args:
        namespace: Mapping the top-level test classes are stored in,
            usually the calling module's globals()
    """

    def __init__(self, namespace: MutableMapping[str, Any]) -> None:
        self.namespace = namespace
        self._stack: List[_Group] = []
        self.declared: List[str] = []

    @property
    def current(self) -> Optional[_Group]:
        return self._stack[-1] if self._stack else None

    def describe(self, label: str, body: GroupBody) -> type:
        """
        Declare a test group.

        The body runs immediately; tests and nested groups it declares
        become members of the resulting class. Returns the class.
        """
        if not callable(body):
            raise SuiteError(f"Group body for '{label}' must be callable")

        group = _Group(label)
        self._stack.append(group)
        try:
            body()
        finally:
            self._stack.pop()

        parent = self.current
        target = parent.attrs if parent is not None else self.namespace
        name = _unique(class_name_for(label), target)
        group.attrs['__module__'] = self.namespace.get('__name__', __name__)
        cls = type(name, (), group.attrs)
        target[name] = cls

        if parent is None:
            self.declared.append(name)
        logger.debug(f"Declared test group '{label}' as {name}")
        return cls

    def it(self, description: str, test: Optional[Callable[..., Any]] = None) -> Any:
        """
        Declare a test in the current group.

        Usable as a decorator, ``@suite.it("does something")``, or called
        directly with the test function. Test functions may take pytest
        fixtures as arguments.

        Raises:
            SuiteError: If called outside a group
        """
        group = self.current
        if group is None:
            raise SuiteError(f"Test '{description}' must be declared inside a group")

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            name = _unique(method_name_for(description), group.attrs)
            group.attrs[name] = staticmethod(fn)
            return fn

        if test is not None:
            return decorator(test)
        return decorator

    def with_data(self, dataset: Any, test_body: Callable[..., Any]) -> List[DataGroup]:
        """Declare one group per dataset entry, see spechelpers.dataprovider.with_data."""
        return with_data(dataset, test_body, self.describe)
