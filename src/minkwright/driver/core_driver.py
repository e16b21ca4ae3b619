"""
Mink style driver contract.

``CoreDriver`` names every operation a driver may offer. Operations a
concrete driver does not override raise ``UnsupportedDriverActionException``
so callers get one predictable failure instead of an ``AttributeError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from .errors import UnsupportedDriverActionException


class KeyModifier:
    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"
    META = "meta"


class CoreDriver(ABC):
    """Base class for drivers; every operation is unsupported until overridden."""

    def _throw_unsupported(self, action: str) -> Any:
        raise UnsupportedDriverActionException(
            f"{action} is not supported by {self.__class__.__name__}"
        )

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def is_started(self) -> bool: ...

    @abstractmethod
    def stop(self) -> None: ...

    def reset(self) -> None:
        self._throw_unsupported("Resetting the session")

    @abstractmethod
    def find_element_xpaths(self, xpath: str) -> List[str]:
        """Return one indexed XPath per element matching ``xpath``."""

    def find(self, xpath: str) -> List[str]:
        return list(self.find_element_xpaths(xpath))

    # Navigation

    def visit(self, url: str) -> None:
        self._throw_unsupported("Visiting an url")

    def get_current_url(self) -> str:
        return self._throw_unsupported("Getting the current url")

    def reload(self) -> None:
        self._throw_unsupported("Page reloading")

    def forward(self) -> None:
        self._throw_unsupported("Forward action")

    def back(self) -> None:
        self._throw_unsupported("Backward action")

    # Headers, auth and cookies

    def set_basic_auth(self, user: Union[str, bool], password: str) -> None:
        self._throw_unsupported("Basic auth setup")

    def set_request_header(self, name: str, value: str) -> None:
        self._throw_unsupported("Request headers manipulation")

    def get_response_headers(self) -> Dict[str, str]:
        return self._throw_unsupported("Response headers")

    def set_cookie(self, name: str, value: Optional[str] = None) -> None:
        self._throw_unsupported("Cookies manipulation")

    def get_cookie(self, name: str) -> Optional[str]:
        return self._throw_unsupported("Cookies")

    # Page content

    def get_status_code(self) -> int:
        return self._throw_unsupported("Getting the status code")

    def get_content(self) -> str:
        return self._throw_unsupported("Getting the page content")

    def get_screenshot(self) -> bytes:
        return self._throw_unsupported("Screenshots")

    # Windows and frames

    def switch_to_window(self, name: Optional[str] = None) -> None:
        self._throw_unsupported("Windows management")

    def switch_to_iframe(self, name: Optional[str] = None) -> None:
        self._throw_unsupported("iFrames management")

    def get_window_names(self) -> List[str]:
        return self._throw_unsupported("Listing all window names")

    def get_window_name(self) -> str:
        return self._throw_unsupported("Getting the current window name")

    def resize_window(self, width: int, height: int, name: Optional[str] = None) -> None:
        self._throw_unsupported("Window resizing")

    def maximize_window(self, name: Optional[str] = None) -> None:
        self._throw_unsupported("Window maximize")

    # Elements

    def get_tag_name(self, xpath: str) -> str:
        return self._throw_unsupported("Getting the tag name")

    def get_text(self, xpath: str) -> str:
        return self._throw_unsupported("Getting the element text")

    def get_html(self, xpath: str) -> str:
        return self._throw_unsupported("Getting the element inner HTML")

    def get_outer_html(self, xpath: str) -> str:
        return self._throw_unsupported("Getting the element outer HTML")

    def get_attribute(self, xpath: str, name: str) -> Optional[str]:
        return self._throw_unsupported("Getting the element attribute")

    def get_value(self, xpath: str) -> Union[str, List[str], None]:
        return self._throw_unsupported("Getting the field value")

    def set_value(self, xpath: str, value: Union[str, bool, List[str]]) -> None:
        self._throw_unsupported("Setting the field value")

    def check(self, xpath: str) -> None:
        self._throw_unsupported("Checking a checkbox")

    def uncheck(self, xpath: str) -> None:
        self._throw_unsupported("Unchecking a checkbox")

    def is_checked(self, xpath: str) -> bool:
        return self._throw_unsupported("Getting the state of a checkbox")

    def select_option(self, xpath: str, value: str, multiple: bool = False) -> None:
        self._throw_unsupported("Selecting an option")

    def is_selected(self, xpath: str) -> bool:
        return self._throw_unsupported("Element selection check")

    def click(self, xpath: str) -> None:
        self._throw_unsupported("Clicking on an element")

    def double_click(self, xpath: str) -> None:
        self._throw_unsupported("Double-clicking")

    def right_click(self, xpath: str) -> None:
        self._throw_unsupported("Right-clicking")

    def attach_file(self, xpath: str, path: str) -> None:
        self._throw_unsupported("Attaching a file in an input")

    def is_visible(self, xpath: str) -> bool:
        return self._throw_unsupported("Element visibility check")

    def mouse_over(self, xpath: str) -> None:
        self._throw_unsupported("Mouse manipulations")

    def focus(self, xpath: str) -> None:
        self._throw_unsupported("Mouse manipulations")

    def blur(self, xpath: str) -> None:
        self._throw_unsupported("Mouse manipulations")

    def key_press(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._throw_unsupported("Keyboard manipulations")

    def key_down(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._throw_unsupported("Keyboard manipulations")

    def key_up(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._throw_unsupported("Keyboard manipulations")

    def drag_to(self, source_xpath: str, destination_xpath: str) -> None:
        self._throw_unsupported("Mouse manipulations")

    def submit_form(self, xpath: str) -> None:
        self._throw_unsupported("Form submission")

    # Scripts

    def execute_script(self, script: str) -> None:
        self._throw_unsupported("JS execution")

    def evaluate_script(self, script: str) -> Any:
        return self._throw_unsupported("JS evaluation")

    def wait(self, timeout: int, condition: str) -> bool:
        return self._throw_unsupported("JS evaluation")
