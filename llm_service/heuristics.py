"""
Date                    Author                          Change Details
19-10-2026                                              Local fast-path for plain navigation instructions
"""
import logging
import re
from typing import Optional, List, Tuple, Protocol

from constant.const_config import DEFAULT_PAGE_CONTEXT, FAST_TRACK_REASONING
from libs.dataclass.conceptual_objects import AutomationStep, ActionType, ResolutionResult, generate_id
from llm_service.response_parser import has_scheme

logger = logging.getLogger(__name__)

NAVIGATION_VERBS = (
    r"navigate\s+to",
    r"go\s+to",
    r"open",
    r"visit",
    # es / pt
    r"visitar",
    r"navegar\s+a",
    r"ir\s+a",
)

_NAV_PATTERN = re.compile(
    r"^(?:" + "|".join(NAVIGATION_VERBS) + r")\s+"
    r"(https?://\S+|[a-z0-9.-]+\.[a-z]{2,})$"
)

# first match wins; path keywords come before the saucedemo domain so /cart.html is a CartPage
PAGE_CONTEXT_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("login",), "LoginPage"),
    (("cart",), "CartPage"),
    (("inventory", "product"), "InventoryPage"),
    (("saucedemo",), "LoginPage"),
]


class LocalResolver(Protocol):
    def resolve(self, instruction: str, current_url: str) -> Optional[ResolutionResult]:
        ...


def classify_page_context(url: str) -> str:
    low = url.lower()
    for needles, page in PAGE_CONTEXT_RULES:
        if any(n in low for n in needles):
            return page
    return DEFAULT_PAGE_CONTEXT


def match_navigation(instruction: str) -> Optional[str]:
    """Returns the resolved URL for a pure navigation instruction, else None."""
    if not instruction:
        return None
    m = _NAV_PATTERN.match(instruction.strip().lower())
    if not m:
        return None
    url = m.group(1)
    if not has_scheme(url):
        url = "https://" + url
    return url


class NavigationHeuristic:
    """
    Resolves "go to example.com" style instructions without calling the model.
    The step order is left at 0; the orchestrator stamps it.
    """

    def resolve(self, instruction: str, current_url: str) -> Optional[ResolutionResult]:
        url = match_navigation(instruction)
        if url is None:
            return None

        page_context = classify_page_context(url)
        step = AutomationStep(
            id=generate_id(),
            order=0,
            description=instruction,
            actionType=ActionType.NAVIGATE,
            targetElement="Browser Window",
            simulatedSelector="/",
            value=url,
            url=url,
            reasoning=FAST_TRACK_REASONING,
            pageContext=page_context,
        )
        logger.info(f'Fast-tracked navigation: {current_url} -> {url} ({page_context})')
        return ResolutionResult(
            steps=[step],
            responseMessage=f"Navigating to {url} ({page_context})",
            newUrl=url,
        )
