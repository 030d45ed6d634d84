"""
Date                    Author                          Change Details
19-10-2026                                              Conversion Of Steps To JSONL
"""
import json
from pathlib import Path
from typing import List, Dict, Any, Optional

from libs.dataclass.conceptual_objects import AutomationStep, ActionType


def _selector_to_playwright(selector: Optional[str]) -> Dict[str, Any]:
    """
    Convert a simulated selector to a Playwright codegen-like method & args.
    This JSONL format is a faithful projection of codegen semantics (not an official format).
    """
    selector = selector or ""
    if selector.startswith("//") or selector.startswith("xpath="):
        return {"method": "locator", "args": [selector if selector.startswith("xpath=") else f"xpath={selector}"]}
    if selector.startswith("text="):
        return {"method": "getByText", "args": [selector[len("text="):], {"exact": True}]}
    if selector.startswith("[data-test") and selector.endswith("]") and "=" in selector:
        value = selector.split("=", 1)[1].rstrip("]").strip("'\"")
        return {"method": "getByTestId", "args": [value]}
    return {"method": "locator", "args": [selector or "html"]}


def step_to_playwright_entry(s: AutomationStep) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "step": s.order,
        "page": s.pageContext,
        "intent": s.description,
        "action": s.actionType.value,
    }

    if s.actionType == ActionType.NAVIGATE:
        entry["method"] = "goto"
        entry["args"] = [s.value or s.url]
        entry["locator"] = None
    elif s.actionType == ActionType.WAIT:
        entry["method"] = "waitForSelector"
        entry["locator"] = _selector_to_playwright(s.simulatedSelector)
    elif s.actionType == ActionType.ASSERT:
        entry["locator"] = _selector_to_playwright(s.simulatedSelector)
        if s.value:
            entry["expect"] = {"type": "toHaveText", "value": {"text": s.value}}
        else:
            entry["expect"] = {"type": "toBeVisible"}
    else:
        entry["method"] = {
            ActionType.CLICK: "click",
            ActionType.FILL: "fill",
            ActionType.HOVER: "hover",
        }.get(s.actionType, "custom")
        entry["locator"] = _selector_to_playwright(s.simulatedSelector)
        entry["input"] = s.value if s.actionType == ActionType.FILL else None

    return entry


def steps_to_playwright_jsonl(steps: List[AutomationStep], out_path: Path) -> None:
    """
    Emit one JSON object per line, mirroring Playwright codegen semantics:
    - navigate becomes goto, assertions become expect entries
    - locator: {method, args}
    """
    lines = [json.dumps(step_to_playwright_entry(s), ensure_ascii=False) for s in steps]
    out_path.write_text("\n".join(lines), encoding="utf-8")
