"""
Date                    Author                          Change Details
19-10-2026                                              Data Structure For Steps, Chat Messages And Generated Files
"""
import json
import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Literal, Dict, Any

from constant.const_config import BLANK_PAGE_URL, DEFAULT_PAGE_CONTEXT

ChatRole = Literal["user", "ai"]

# file path -> file source text
GeneratedFiles = Dict[str, str]


class ActionType(str, Enum):
    NAVIGATE = "NAVIGATE"
    CLICK = "CLICK"
    FILL = "FILL"
    ASSERT = "ASSERT"
    WAIT = "WAIT"
    HOVER = "HOVER"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def coerce(cls, raw: Any) -> "ActionType":
        """Map loose model output ("click", " Fill ", None) onto the closed set."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return cls.UNKNOWN
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.UNKNOWN


def generate_id() -> str:
    return str(uuid.uuid4())


# ---------- Core dataclasses ----------

@dataclass
class AutomationStep:
    id: str
    order: int
    description: str
    actionType: ActionType
    targetElement: str
    simulatedSelector: str
    value: Optional[str] = None
    url: Optional[str] = None
    reasoning: str = ""
    pageContext: str = DEFAULT_PAGE_CONTEXT

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["actionType"] = self.actionType.value
        return d


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: ChatRole
    content: str
    relatedStepId: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ResolutionResult:
    steps: List[AutomationStep]
    responseMessage: str
    newUrl: str


@dataclass
class ProcessState:
    isProcessing: bool = False
    currentUrl: str = BLANK_PAGE_URL
    steps: List[AutomationStep] = field(default_factory=list)
    chatHistory: List[ChatMessage] = field(default_factory=list)
    generatedFiles: Optional[GeneratedFiles] = None
    error: Optional[str] = None


def new_chat_message(role: ChatRole, content: str, related_step_id: Optional[str] = None) -> ChatMessage:
    return ChatMessage(id=generate_id(), role=role, content=content, relatedStepId=related_step_id)


# ---------- JSON utilities ----------

# Steps <-> JSON
def step_from_json_obj(obj: Dict[str, Any]) -> AutomationStep:
    required = ["id", "order", "description", "actionType"]
    for k in required:
        if k not in obj:
            raise ValueError(f"Step missing required field: {k}")

    return AutomationStep(
        id=str(obj["id"]),
        order=int(obj["order"]),
        description=str(obj["description"]),
        actionType=ActionType.coerce(obj["actionType"]),
        targetElement=str(obj.get("targetElement") or ""),
        simulatedSelector=str(obj.get("simulatedSelector") or ""),
        value=obj.get("value"),
        url=obj.get("url"),
        reasoning=str(obj.get("reasoning") or ""),
        pageContext=str(obj.get("pageContext") or DEFAULT_PAGE_CONTEXT),
    )


def steps_from_json_str(json_str: str) -> List[AutomationStep]:
    raw = json.loads(json_str)
    if not isinstance(raw, list):
        raise ValueError("Steps JSON must be a list of step objects.")
    return [step_from_json_obj(o) for o in raw]


def steps_to_json(steps: List[AutomationStep], indent: int = 2) -> str:
    return json.dumps([s.to_dict() for s in steps], ensure_ascii=False, indent=indent)


# Chat <-> JSON
def chat_to_json(history: List[ChatMessage], indent: int = 2) -> str:
    return json.dumps([m.to_dict() for m in history], ensure_ascii=False, indent=indent)
