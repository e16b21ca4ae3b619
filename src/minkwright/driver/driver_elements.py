"""Element query and manipulation mixin for PlaywrightDriver."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

from .core_driver import KeyModifier
from .driver_common import _normalize_visible_text, _xpath_selector
from .driver_scripts import (
    GET_RADIO_VALUE_JS,
    HAS_FORM_JS,
    IS_MULTIPLE_JS,
    IS_SELECTED_JS,
    KEYBOARD_EVENT_JS,
    OPTION_SELECTED_JS,
    OUTER_HTML_JS,
    SET_RADIO_VALUE_JS,
    SUBMIT_FORM_JS,
    TAG_NAME_JS,
    TEXT_INPUT_EVENTS_JS,
)
from .errors import DriverException, DriverUsageException, ElementNotFoundException

logger = logging.getLogger(__name__)

_MODIFIER_KEYS = {
    KeyModifier.CTRL: "Control",
    KeyModifier.ALT: "Alt",
    KeyModifier.SHIFT: "Shift",
    KeyModifier.META: "Meta",
}


def _modifier_key(modifier: Optional[str]) -> Optional[str]:
    return _MODIFIER_KEYS.get(modifier) if modifier else None


def _key_and_code(char: Union[str, int]) -> tuple[str, int]:
    if isinstance(char, int):
        return chr(char), char
    key = str(char)
    return key, (ord(key) if len(key) == 1 else 0)


class DriverElementsMixin:
    def _locator(self, xpath: str) -> Any:
        page = self._live_page()
        selector = _xpath_selector(xpath)
        scope = self._state.frame_scope
        if scope is not None:
            return scope.locator(selector)
        return page.locator(selector)

    def _first(self, xpath: str) -> Any:
        handle = self._safe(lambda: self._locator(xpath).first)
        if self._safe(handle.count) == 0:
            raise ElementNotFoundException(f"No element matches xpath: {xpath}")
        return handle

    def _tag_and_type(self, element: Any) -> tuple[str, Optional[str]]:
        tag = self._safe(lambda: element.evaluate(TAG_NAME_JS))
        input_type = self._safe(lambda: element.get_attribute("type"))
        return (tag if isinstance(tag, str) else ""), input_type

    def find_element_xpaths(self, xpath: str) -> List[str]:
        count = self._safe(lambda: self._locator(xpath).count())
        return [f"({xpath})[{index}]" for index in range(1, count + 1)]

    # Reading

    def get_tag_name(self, xpath: str) -> str:
        tag = self._safe(lambda: self._first(xpath).evaluate(TAG_NAME_JS))
        if not isinstance(tag, str):
            raise DriverException("Unable to determine tag name")
        return tag

    def get_text(self, xpath: str) -> str:
        text = self._safe(lambda: self._first(xpath).inner_text())
        if not isinstance(text, str):
            raise DriverException("Unable to read text")
        return _normalize_visible_text(text)

    def get_html(self, xpath: str) -> str:
        html = self._safe(lambda: self._first(xpath).inner_html())
        if not isinstance(html, str):
            raise DriverException("Unable to read HTML")
        return html

    def get_outer_html(self, xpath: str) -> str:
        html = self._safe(lambda: self._first(xpath).evaluate(OUTER_HTML_JS))
        if not isinstance(html, str):
            raise DriverException("Unable to read outerHTML")
        return html

    def get_attribute(self, xpath: str, name: str) -> Optional[str]:
        value = self._safe(lambda: self._first(xpath).get_attribute(name))
        return value if isinstance(value, str) else None

    def get_value(self, xpath: str) -> Union[str, List[str], None]:
        def read() -> Union[str, List[str], None]:
            element = self._first(xpath)
            tag, input_type = self._tag_and_type(element)
            if tag == "input" and input_type == "checkbox":
                return self._checkbox_value(element)
            if tag == "input" and input_type == "radio":
                return self._radio_value(element)
            if tag == "option":
                return self._option_value(element)
            if tag == "select":
                return self._select_value(element)
            return element.input_value()

        return self._safe(read)

    def _checkbox_value(self, element: Any) -> Optional[str]:
        if not element.is_checked():
            return None
        value = element.get_attribute("value")
        return value if value is not None else "on"

    def _radio_value(self, element: Any) -> Optional[str]:
        value = element.evaluate(GET_RADIO_VALUE_JS)
        return value if isinstance(value, str) else None

    def _option_value(self, element: Any) -> str:
        value = element.get_attribute("value")
        if value is not None:
            return value
        return _normalize_visible_text(element.inner_text())

    def _select_value(self, element: Any) -> Union[str, List[str]]:
        if not element.evaluate(IS_MULTIPLE_JS):
            return element.input_value()
        values: List[str] = []
        for option in element.locator("option").all():
            if option.evaluate(OPTION_SELECTED_JS):
                values.append(self._option_value(option))
        return values

    def is_checked(self, xpath: str) -> bool:
        return bool(self._safe(lambda: self._first(xpath).is_checked()))

    def is_selected(self, xpath: str) -> bool:
        return bool(self._safe(lambda: self._first(xpath).evaluate(IS_SELECTED_JS)))

    def is_visible(self, xpath: str) -> bool:
        return bool(self._safe(lambda: self._first(xpath).is_visible()))

    # Form values

    def set_value(self, xpath: str, value: Union[str, bool, List[str]]) -> None:
        element = self._first(xpath)

        if isinstance(value, (list, tuple)):
            self._set_multi_select_value(element, value)
            return

        if isinstance(value, bool):
            self._set_checkbox_value(element, value)
            return

        tag, input_type = self._tag_and_type(element)
        text_value = str(value)
        if tag == "input" and input_type == "file":
            self._safe(lambda: element.set_input_files([text_value]))
        elif tag == "select":
            self._safe(lambda: element.select_option(text_value))
        elif tag == "input" and input_type == "radio":
            self._set_radio_value(element, text_value)
        else:
            self._set_text_value(element, text_value)

    def _set_multi_select_value(self, element: Any, values: Iterable[Any]) -> None:
        cleaned = [str(item) for item in values if isinstance(item, (str, int, float)) and str(item) != ""]
        self._safe(lambda: element.select_option(cleaned))

    def _set_checkbox_value(self, element: Any, value: bool) -> None:
        tag, input_type = self._tag_and_type(element)
        if tag != "input" or input_type != "checkbox":
            raise DriverUsageException("Boolean value is only supported for checkboxes")
        self._safe(element.check if value else element.uncheck)

    def _set_radio_value(self, element: Any, value: str) -> None:
        if not self._safe(lambda: element.get_attribute("name")):
            own_value = self._safe(lambda: element.get_attribute("value"))
            if (own_value if own_value is not None else "on") != value:
                raise DriverUsageException("Radio button group must have a name attribute.")
        try:
            element.evaluate(SET_RADIO_VALUE_JS, value)
        except Exception as exc:
            message = str(exc)
            if "radio button not found" in message.lower():
                raise DriverUsageException(f"Radio button not found for value '{value}' in the same form") from exc
            if "must have a name attribute" in message:
                raise DriverUsageException("Radio button group must have a name attribute.") from exc
            raise DriverException(message) from exc

    def _set_text_value(self, element: Any, value: str) -> None:
        def fill() -> None:
            element.fill(value)
            element.evaluate(TEXT_INPUT_EVENTS_JS)

        self._safe(fill)

    def check(self, xpath: str) -> None:
        self._safe(lambda: self._first(xpath).check())

    def uncheck(self, xpath: str) -> None:
        self._safe(lambda: self._first(xpath).uncheck())

    def select_option(self, xpath: str, value: str, multiple: bool = False) -> None:
        element = self._first(xpath)
        tag, input_type = self._tag_and_type(element)

        if tag == "select":
            if multiple:
                current = self.get_value(xpath)
                existing = current if isinstance(current, list) else []
                selected = list(dict.fromkeys([*existing, value]))
                self._safe(lambda: element.select_option(selected))
            else:
                self._safe(lambda: element.select_option(value))
            return

        if tag == "input" and input_type == "radio":
            self._set_radio_value(element, value)
            return

        raise DriverUsageException("selectOption failed: element is not a <select> or radio button")

    def attach_file(self, xpath: str, path: str) -> None:
        element = self._first(xpath)
        tag, input_type = self._tag_and_type(element)
        if tag != "input" or input_type != "file":
            raise DriverUsageException("attachFile: element is not a file input")
        self._safe(lambda: element.set_input_files([path]))

    def submit_form(self, xpath: str) -> None:
        element = self._first(xpath)
        if not self._safe(lambda: element.evaluate(HAS_FORM_JS)):
            raise DriverUsageException("Element is not in a form")
        self._safe(lambda: element.evaluate(SUBMIT_FORM_JS))

    # Mouse

    def click(self, xpath: str) -> None:
        self._safe(lambda: self._first(xpath).click())

    def double_click(self, xpath: str) -> None:
        self._safe(lambda: self._first(xpath).dblclick())

    def right_click(self, xpath: str) -> None:
        self._safe(lambda: self._first(xpath).click(button="right"))

    def mouse_over(self, xpath: str) -> None:
        element = self._first(xpath)
        self._safe(element.hover)

    def focus(self, xpath: str) -> None:
        element = self._first(xpath)
        self._safe(element.focus)

    def blur(self, xpath: str) -> None:
        element = self._first(xpath)
        self._safe(element.blur)

    def drag_to(self, source_xpath: str, destination_xpath: str) -> None:
        source = self._first(source_xpath)
        destination = self._first(destination_xpath)
        self._safe(lambda: source.drag_to(destination))

    # Keyboard

    def _dispatch_key_event(
        self,
        event_type: str,
        xpath: str,
        char: Union[str, int],
        modifier: Optional[str],
        *,
        with_code: bool = True,
    ) -> None:
        key, code = _key_and_code(char)
        payload = {
            "type": event_type,
            "key": key,
            "code": code if with_code else None,
            "mod": _modifier_key(modifier),
        }
        self._safe(lambda: self._first(xpath).evaluate(KEYBOARD_EVENT_JS, payload))

    def key_press(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._dispatch_key_event("keypress", xpath, char, modifier)

    def key_down(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._dispatch_key_event("keydown", xpath, char, modifier, with_code=False)

    def key_up(self, xpath: str, char: Union[str, int], modifier: Optional[str] = None) -> None:
        self._dispatch_key_event("keyup", xpath, char, modifier)
