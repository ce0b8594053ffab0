"""
DOM and window utilities for browser tests.

This module creates child windows and iframe documents with a known
HTML5 document structure, and waits for or validates window sizes. It
works on Playwright's synchronous API: pages, frames and iframe element
handles or locators.

If a child window can't be created, a pop-up blocker usually prevents it.
"""

import logging
from collections.abc import Mapping
from typing import Optional, Union

from playwright.sync_api import ElementHandle, Frame, Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from spechelpers.models import WindowSize

logger = logging.getLogger(__name__)

# Minimal document written into new windows and iframes
HTML5_DOCUMENT = (
    '<!DOCTYPE html>\n<html>\n<head>\n<meta charset="UTF-8">\n'
    '<title></title>\n</head>\n<body>\n</body>\n</html>'
)

# Browser chrome settings for windows opened with an explicit size
SIZED_WINDOW_FEATURES = "top=0,left=0,location=no,menubar=no,status=no,toolbar=no,resizeable=yes,scrollbars=yes"

# Polling defaults, in milliseconds
DEFAULT_POLL_INTERVAL = 100
DEFAULT_READY_TIMEOUT = 10000

PARENT_SIZE = "parent"

WINDOW_SIZE_SCRIPT = """() => ({
    width: document.documentElement.clientWidth,
    height: document.documentElement.clientHeight
})"""

OPEN_WINDOW_SCRIPT = "features => { window.open('', '', features || ''); }"

SizeSpec = Union[WindowSize, Mapping]


class DomUtilsError(Exception):
    """Base class for DOM utility errors."""


class ChildWindowError(DomUtilsError):
    """Raised when a child window can't be created."""


class IframeAccessError(DomUtilsError):
    """Raised when an iframe's content document is not accessible."""


class WindowSizeError(DomUtilsError, AssertionError):
    """Raised when a window does not have the expected size."""


class WindowSizeTimeoutError(DomUtilsError):
    """Raised when a window size does not settle in time."""


def to_window_size(size: SizeSpec) -> WindowSize:
    """Accept a WindowSize or a {'width': ..., 'height': ...} mapping."""
    if isinstance(size, WindowSize):
        return size
    return WindowSize(**size)


def get_window_size(page: Union[Page, Frame]) -> WindowSize:
    """Return the client size of the document element of a page."""
    return WindowSize(**page.evaluate(WINDOW_SIZE_SCRIPT))


def child_window_features(
    size: Optional[Union[SizeSpec, str]],
    parent_size: Optional[WindowSize] = None,
) -> Optional[str]:
    """
    Build the window.open feature string for a child window.

    With a size, the window is opened with minimal browser chrome (no menu,
    location and status bars) at the top left of the screen. Without one,
    the browser defaults apply and None is returned.

    Args:
        size: None, "parent" (same size as the opener), or a size
        parent_size: Size of the opener, required for "parent"

    Returns:
        Feature string, or None for browser defaults

    Raises:
        ValueError: If size is "parent" and no parent_size is given

    Examples:
        >>> child_window_features({'width': 400, 'height': 300})
        'width=400,height=300,top=0,left=0,location=no,menubar=no,status=no,toolbar=no,resizeable=yes,scrollbars=yes'
    """
    if size is None:
        return None

    if size == PARENT_SIZE:
        if parent_size is None:
            raise ValueError("A parent size is required to open a window with the size of its parent")
        window_size = parent_size
    else:
        window_size = to_window_size(size)

    return f"width={window_size.width},height={window_size.height},{SIZED_WINDOW_FEATURES}"


def create_child_window(
    page: Page,
    size: Optional[Union[SizeSpec, str]] = None,
    wait_ready: bool = False,
    timeout: float = DEFAULT_READY_TIMEOUT,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> Optional[Page]:
    """
    Create a child window containing an empty HTML5 document.

    The document has an HTML5 doctype, a UTF-8 charset, and empty head,
    title and body tags.

    Args:
        page: The opener page
        size: "parent" for the opener's size, or a size; None for browser defaults
        wait_ready: Wait until the document is ready and the window has
            settled at its final size
        timeout: Maximum time to wait for the window to open, and to settle
            when wait_ready is set, in ms
        interval: Size polling interval in ms when wait_ready is set

    Returns:
        The child window page, or None if the window could not be created

    Raises:
        ChildWindowError: If wait_ready is set and the window could not be created
    """
    parent_size = get_window_size(page) if size == PARENT_SIZE else None
    features = child_window_features(size, parent_size)

    try:
        with page.expect_popup(timeout=timeout) as popup_info:
            page.evaluate(OPEN_WINDOW_SCRIPT, features)
        child = popup_info.value
    except PlaywrightTimeoutError:
        child = None

    if child is None:
        logger.warning("Child window could not be created, a pop-up blocker may be active")
        if wait_ready:
            raise ChildWindowError("The child window could not be created")
        return None

    child.set_content(HTML5_DOCUMENT)
    logger.debug(f"Child window created with features: {features or 'browser defaults'}")

    if wait_ready:
        window_size_ready(child, interval=interval, timeout=timeout)

    return child


def create_iframe_document(iframe: Union[ElementHandle, Locator]) -> Frame:
    """
    Write an HTML5 document with UTF-8 encoding into an iframe.

    The iframe element MUST have been attached to the DOM by the time this
    function is called; the document inside an iframe only exists after that.
    Returns once the iframe document is ready.

    Args:
        iframe: The iframe element, as an element handle or a locator

    Returns:
        The iframe's content frame

    Raises:
        IframeAccessError: If the content document is not accessible
    """
    if isinstance(iframe, Locator):
        iframe = iframe.element_handle()

    frame = iframe.content_frame()
    if frame is None:
        raise IframeAccessError(
            "Cannot access the iframe content document. Make sure the iframe has already been inserted "
            "into the DOM at this point. Also, check for cross-domain policy restrictions."
        )

    frame.set_content(HTML5_DOCUMENT)
    frame.wait_for_load_state("domcontentloaded")
    return frame


def window_size_ready(
    page: Page,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_READY_TIMEOUT,
) -> WindowSize:
    """
    Wait for the size of a window to become stable.

    Use it when a window has been resized, and when a new window has been
    created. Waiting a single tick is almost, but not quite, always enough
    for a window to assume its final size, so the size is polled at regular
    intervals instead. It is stable once two consecutive readings match and
    neither dimension is zero.

    Args:
        page: The window to observe
        interval: Polling interval in ms
        timeout: Maximum time to wait, in ms

    Returns:
        The stable window size

    Raises:
        WindowSizeTimeoutError: If the size has not settled within the timeout
    """
    page.wait_for_load_state("domcontentloaded")

    last_size = get_window_size(page)
    waited = 0.0
    while waited < timeout:
        page.wait_for_timeout(interval)
        waited += interval

        size = get_window_size(page)
        if not size.is_empty and size == last_size:
            logger.debug(f"Window size settled at {size.width}x{size.height} after {waited:g}ms")
            return size
        last_size = size

    raise WindowSizeTimeoutError(
        f"The window size did not settle within {timeout:g}ms "
        f"(last size: {last_size.width}x{last_size.height}px)"
    )


def validate_window_size(expected: SizeSpec, page: Page, exactly: bool = False) -> None:
    """
    Make sure a window is at least as large as the expected size.

    Optionally, validate that the window matches the expected size exactly.

    Args:
        expected: Expected (minimum) size
        page: The window to check
        exactly: Require an exact match instead of a minimum

    Raises:
        WindowSizeError: If the window does not match the expected size
    """
    expected = to_window_size(expected)
    actual = get_window_size(page)
    msg = ""

    if exactly:
        if actual.width != expected.width:
            msg = f" Window width is {actual.width}px (expected: {expected.width}px)."
        if actual.height != expected.height:
            msg += f" Window height is {actual.height}px (expected: {expected.height}px)."
    else:
        if actual.width < expected.width:
            msg = f" Window width is {actual.width}px (expected minimum: {expected.width}px)."
        if actual.height < expected.height:
            msg += f" Window height is {actual.height}px (expected minimum: {expected.height}px)."

    if msg:
        raise WindowSizeError("The browser window does not match the expected size." + msg)
