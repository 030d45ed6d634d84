import json
from typing import List, Dict, Any


def get_ai_sys_role_for_instruction_to_steps():
    system_prompt_steps = (
        """
You are a Playwright Automation Expert generating a Page Object Model (POM) test.
You turn one free-form testing instruction into an ordered SEQUENCE of atomic
browser actions, using the previous steps of the test as context.

CORE PRINCIPLES:
- Each step represents EXACTLY ONE user action.
- Allowed actionType values: NAVIGATE, CLICK, FILL, ASSERT, WAIT, HOVER.
- FILL and NAVIGATE steps MUST carry a "value" (input text or URL).
- Output STRICT JSON only. No prose, no markdown, no comments.
        """
    )
    return system_prompt_steps


def build_instruction_prompt(instruction: str, current_url: str, context_summary: str) -> str:
    return (
        f"""
User Instruction: "{instruction}"
Current URL: {current_url}
Previous Steps:
{context_summary}

TASK:
1. Break down the User Instruction into a SEQUENCE of atomic Playwright actions.
2. Example: If user says "Login", generate 3 steps: FILL username, FILL password, CLICK login.
3. If user says "valid credentials" (or any other "valid" data) and you don't know them, invent plausible
   placeholders (e.g. "standard_user" / "secret_sauce" for SauceDemo, otherwise "user" / "password123").
4. Simulate scraping: infer optimal selectors from standard web conventions (id, data-test, data-testid,
   name, aria-label) before falling back to text or CSS structure.
5. Identify the 'pageContext' (Page Object Class Name, e.g. LoginPage, InventoryPage) for EACH step.

Output JSON ONLY with this structure:
{{
  "steps": [
    {{
      "actionType": "NAVIGATE|CLICK|FILL|ASSERT|WAIT|HOVER",
      "targetElement": "Human readable name (e.g. Username Input)",
      "simulatedSelector": "Robust selector (e.g. #user-name)",
      "value": "Input text or URL (optional)",
      "reasoning": "Why this selector?",
      "pageContext": "LoginPage"
    }}
  ],
  "newUrl": "Predicted URL after ALL steps completed",
  "responseMessage": "Summary of actions taken"
}}
        """
    )


LANGUAGE_PROFILES: Dict[str, Dict[str, str]] = {
    "javascript": {
        "title": "JavaScript (ES Modules)",
        "test_file": "tests/scenario.spec.js",
        "page_file": "pages/[PageName].js",
        "syntax": "Use 'import/export' syntax (type=\"module\"). Page Objects are classes exporting a default or named class.",
        "example": '{\n  "tests/scenario.spec.js": "import { test } from \'@playwright/test\'; ...",\n'
                   '  "pages/LoginPage.js": "export class LoginPage { ... }"\n}',
    },
    "typescript": {
        "title": "TypeScript",
        "test_file": "tests/scenario.spec.ts",
        "page_file": "pages/[PageName].ts",
        "syntax": "Type the 'page' constructor argument as Page from '@playwright/test' and export each class by name.",
        "example": '{\n  "tests/scenario.spec.ts": "import { test } from \'@playwright/test\'; ...",\n'
                   '  "pages/LoginPage.ts": "export class LoginPage { ... }"\n}',
    },
    "python": {
        "title": "Python (pytest-playwright, sync API)",
        "test_file": "tests/test_scenario.py",
        "page_file": "pages/[page_name].py",
        "syntax": "Page Objects are classes taking a playwright.sync_api.Page; the test uses the 'page' fixture.",
        "example": '{\n  "tests/test_scenario.py": "from pages.login_page import LoginPage ...",\n'
                   '  "pages/login_page.py": "class LoginPage: ..."\n}',
    },
}


def get_ai_sys_role_for_pom_generation():
    return (
        "You are a Playwright Architecture Generator. You write complete, runnable Page Object Model "
        "projects from recorded scenario steps and answer with a single JSON object only."
    )


def build_pom_generation_prompt(simple_steps: List[Dict[str, Any]], language: str = "javascript") -> str:
    profile = LANGUAGE_PROFILES.get(language, LANGUAGE_PROFILES["javascript"])
    return (
        f"""
Create a robust Page Object Model (POM) project in **{profile['title']}**.

SCENARIO STEPS:
{json.dumps(simple_steps, indent=2, ensure_ascii=False)}

REQUIREMENTS:
1. Output a JSON object where keys are file paths and values are file content.
2. Structure:
   - '{profile['test_file']}': The main test file. Imports pages, runs the test.
   - '{profile['page_file']}': One file per unique 'page' found in steps.
3. {profile['syntax']}
4. In Page Objects, create semantic methods (e.g., login(user, pass), addToCart()) that group the raw steps.
   - IMPORTANT: If you see consecutive FILL/CLICK steps on the same page (like Login), group them into a
     single method (e.g. login()).
5. Return ONLY valid JSON.

Example Output format:
{profile['example']}
        """
    )
