"""
In-memory Target / ExecutionContext doubles for framework unit tests.

Every driver call is recorded in `calls` so tests can assert on order.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from testsuites.ui_testing.framework.target import ExecutionContext, Target


class FakeTarget(Target):
    def __init__(
        self,
        description: str = "element",
        exists: bool = True,
        visible: bool = True,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        count: Optional[int] = None,
        classes: Iterable[str] = (),
        enabled: bool = True,
        checked: bool = False,
        options: Optional[Dict[str, str]] = None,
        click_errors: Iterable[BaseException] = (),
    ):
        self.description = description
        self.is_present = exists
        self.is_shown = visible
        self.text_value = text
        self.attributes = dict(attributes or {})
        self.match_count = count if count is not None else int(exists)
        self.classes = set(classes)
        self.is_enabled = enabled
        self.is_checked = checked
        # option value -> option text
        self.options = dict(options or {})
        self.click_errors = list(click_errors)
        self.value = ""
        self.selected: Optional[str] = None
        self.calls: List[str] = []

    async def exists(self) -> bool:
        return self.is_present

    async def visible(self) -> bool:
        return self.is_shown

    async def text(self) -> str:
        return self.text_value

    async def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    async def count(self) -> int:
        return self.match_count

    async def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    async def enabled(self) -> bool:
        return self.is_enabled

    async def checked(self) -> bool:
        return self.is_checked

    async def click(self) -> None:
        self.calls.append("click")
        if self.click_errors:
            raise self.click_errors.pop(0)

    async def double_click(self) -> None:
        self.calls.append("double_click")

    async def right_click(self) -> None:
        self.calls.append("right_click")

    async def hover(self) -> None:
        self.calls.append("hover")

    async def scroll_into_view(self) -> None:
        self.calls.append("scroll_into_view")

    async def clear(self) -> None:
        self.calls.append("clear")
        self.value = ""

    async def type_text(self, text: str, **options) -> None:
        self.calls.append(f"type:{text}")
        self.value += text

    def find_option_by_text(self, text: str) -> "FakeOption":
        for value, option_text in self.options.items():
            if text in option_text:
                return FakeOption(self, value, f"option '{text}' of {self.description}")
        return FakeOption(self, None, f"option '{text}' of {self.description}")

    def find_option_by_value(self, value: str) -> "FakeOption":
        found = value if value in self.options else None
        return FakeOption(self, found, f"option [value={value}] of {self.description}")


class FakeOption(FakeTarget):
    def __init__(self, dropdown: FakeTarget, value: Optional[str], description: str):
        super().__init__(description, exists=value is not None)
        self.dropdown = dropdown
        self.option_value = value

    async def click(self) -> None:
        self.calls.append("click")
        self.dropdown.selected = self.option_value


class FakeContext(ExecutionContext):
    def __init__(self, url: str = "http://shop.test/index.php", screenshot_dir: Path = Path(".")):
        self.url = url
        self.screenshot_dir = screenshot_dir
        self.elements: Dict[str, FakeTarget] = {}
        self.frame: Optional[Target] = None
        self.calls: List[str] = []

    def add(self, selector: str, target: FakeTarget) -> FakeTarget:
        self.elements[selector] = target
        return target

    def locate(self, selector: str, description: str = "") -> Target:
        if selector not in self.elements:
            self.elements[selector] = FakeTarget(description or selector, exists=False, visible=False)
        return self.elements[selector]

    async def current_url(self) -> str:
        return self.url

    async def goto(self, url: str) -> None:
        self.calls.append(f"goto:{url}")
        self.url = url
        self.frame = None

    async def reload(self, hard: bool = True) -> None:
        self.calls.append(f"reload:hard={hard}")

    async def screenshot(self, name: str) -> Path:
        self.calls.append(f"screenshot:{name}")
        return self.screenshot_dir / f"{name}.png"

    async def switch_to_frame(self, target: Target) -> None:
        self.calls.append(f"switch_to_frame:{target}")
        self.frame = target

    async def switch_to_main(self) -> None:
        self.calls.append("switch_to_main")
        self.frame = None


class RecordingLog:
    """StepLogger stand-in that keeps (kind, message, details) tuples."""

    def __init__(self):
        self.records: List[tuple] = []

    def bind(self, **context) -> "RecordingLog":
        return self

    def __getattr__(self, kind: str):
        if kind not in ("step", "action", "assertion", "debug", "info", "warning", "error", "exception"):
            raise AttributeError(kind)

        def _record(message: str, **details) -> None:
            self.records.append((kind, message, details))

        return _record

    def messages(self, kind: str) -> List[str]:
        return [message for k, message, _ in self.records if k == kind]
