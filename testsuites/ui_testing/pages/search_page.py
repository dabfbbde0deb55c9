"""
Product search page object (header search box and the result listing).
"""

from __future__ import annotations

from typing import List
import re

import allure

from testsuites.ui_testing.framework.page_base import BasePage


class SearchPage(BasePage):
    """Storefront search page object."""

    URL_PATH = ""
    PAGE_TITLE = "Home"

    SEARCH_INPUT = "#search_query_top"
    SEARCH_BUTTON = "button[name='submit_search']"
    RESULTS = ".product_list .product-container"
    RESULT_NAMES = ".product_list .product-container .product-name"
    RESULT_COUNTER = ".heading-counter"
    NO_RESULTS_ALERT = ".alert-warning"

    SEARCH_URL_PART = "controller=search"

    @allure.step("Open home page")
    async def open(self) -> "SearchPage":
        await self.navigate()
        await self.actions.wait_for_element(self.element(self.SEARCH_INPUT, "Search box"))
        return self

    @allure.step("Search for '{query}'")
    async def search(self, query: str) -> None:
        self.log.step("Search products", query=query)
        await self.actions.type_text_clear(self.element(self.SEARCH_INPUT, "Search box"), query)
        await self.actions.click_with_retry(self.element(self.SEARCH_BUTTON, "Search button"))
        await self.actions.wait_for_element(
            self.element(self.RESULT_COUNTER, "Result counter"),
            timeout_ms=self.settings.page_request_timeout_ms,
        )

    async def result_count(self) -> int:
        return await self.actions.get_element_count(self.element(self.RESULTS, "Search results"))

    async def reported_result_count(self) -> int:
        """Number shown in the heading counter ("7 results have been found.")."""
        text = await self.actions.get_element_text(self.element(self.RESULT_COUNTER, "Result counter"))
        match = re.search(r"\d+", text)
        return int(match.group()) if match else 0

    async def result_names(self) -> List[str]:
        names = self.element(self.RESULT_NAMES, "Result names")
        count = await self.actions.get_element_count(names)
        result = []
        for index in range(1, count + 1):
            item = self.element(
                f".product_list > li:nth-child({index}) .product-name",
                f"Result name #{index}",
            )
            result.append((await self.actions.get_element_text(item)).strip())
        return result

    async def assert_results_shown(self) -> None:
        await self.check.assert_url_contains(self.SEARCH_URL_PART)
        await self.check.assert_element_visible(
            self.element(self.RESULTS, "Search results"), "Search results should be displayed"
        )

    async def assert_no_results(self, query: str) -> None:
        alert = self.element(self.NO_RESULTS_ALERT, "No results alert")
        await self.check.assert_element_visible(alert, "No results message should be displayed")
        await self.check.assert_text_contains(alert, query)


__all__ = [
    "SearchPage",
]
