"""
Date                Author                                  Change Details
19-10-2026                                                  Managing Results/Generated Files
"""
import logging
from pathlib import Path, PurePosixPath
from typing import List

from libs.dataclass.conceptual_objects import AutomationStep, ChatMessage, GeneratedFiles, steps_to_json, chat_to_json

logger = logging.getLogger(__name__)


class ArtifactManager:
    def __init__(self, run_dir: Path):
        self.run_dir = run_dir
        self.pom_dir = self.run_dir / "pom"
        self.run_dir.mkdir(parents=True, exist_ok=True)

    def _safe_target(self, rel_path: str) -> Path:
        # bundle keys come from the model, keep them inside pom/
        parts = PurePosixPath(rel_path.replace("\\", "/")).parts
        if not parts or parts[0] == "/" or ".." in parts or ":" in parts[0]:
            raise ValueError(f"Refusing to write outside the bundle folder: {rel_path}")
        return self.pom_dir.joinpath(*parts)

    def save_generated_files(self, files: GeneratedFiles) -> List[Path]:
        written = []
        for rel_path, content in files.items():
            target = self._safe_target(rel_path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            written.append(target)
        logger.info(f'Saved {len(written)} generated files to {self.pom_dir}')
        return written

    def save_steps(self, steps: List[AutomationStep]) -> Path:
        plan_path = self.run_dir / "plan.json"
        plan_path.write_text(steps_to_json(steps), encoding="utf-8")
        return plan_path

    def save_chat(self, history: List[ChatMessage]) -> Path:
        chat_path = self.run_dir / "chat.json"
        chat_path.write_text(chat_to_json(history), encoding="utf-8")
        return chat_path
