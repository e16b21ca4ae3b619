import pytest

from minkwright.driver.core_driver import CoreDriver
from minkwright.driver.errors import UnsupportedDriverActionException


class ListingDriver(CoreDriver):
    def start(self):
        pass

    def is_started(self):
        return True

    def stop(self):
        pass

    def find_element_xpaths(self, xpath):
        return [f"({xpath})[1]"]


def test_find_delegates_to_find_element_xpaths():
    assert ListingDriver().find("//a") == ["(//a)[1]"]


@pytest.mark.parametrize(
    "call",
    [
        lambda d: d.visit("https://example.com"),
        lambda d: d.get_screenshot(),
        lambda d: d.switch_to_window("popup"),
        lambda d: d.evaluate_script("1"),
        lambda d: d.reset(),
    ],
)
def test_operations_default_to_unsupported(call):
    with pytest.raises(UnsupportedDriverActionException, match="not supported by ListingDriver"):
        call(ListingDriver())


def test_abstract_methods_must_be_implemented():
    with pytest.raises(TypeError):
        CoreDriver()
