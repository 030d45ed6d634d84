# main.py
"""
Date                    Author                          Change Details
19-10-2026                                              Main Script (Wiring)

"""
import asyncio
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List

from constant.const_config import PARENT_DIR

ROOT = PARENT_DIR
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from constant.const_config import LOG_FILE, LOG_FOLDER
from libs.artifacts.artifacts import ArtifactManager
from llm_service.recorder_agent import RecorderAgent
from pom_lib_ext.config import load_app_config
from pom_lib_ext.session import RecorderSession
from pom_lib_ext.step_exporter import steps_to_playwright_jsonl

logger = logging.getLogger()


# region Logging Initiation
def init_logging(level: int = logging.INFO) -> None:
    os.makedirs(LOG_FOLDER, exist_ok=True)
    logger.setLevel(level)
    if not logger.handlers:
        fh = logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8")

        fmt = logging.Formatter(
            "%(asctime)s %(levelname)s "
            "[%(name)s %(filename)s:%(lineno)d %(funcName)s] %(message)s"
        )

        fh.setFormatter(fmt)
        logger.addHandler(fh)
    logger.info("Logging Started For POM Recording From English Instructions - ")


# endregion


# region wiring

async def record(instructions: List[str]) -> Path:
    # region Initiate Configuration
    cfg = load_app_config()
    if cfg.logging.verbosity == "verbose":
        logger.setLevel(logging.DEBUG)
    elif cfg.logging.verbosity == "silent":
        logger.setLevel(logging.WARNING)

    time_stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(os.path.join(LOG_FOLDER, f'run_{time_stamp}'))
    artifacts = ArtifactManager(run_dir)
    # endregion

    # region Instruction -> Steps
    session = RecorderSession(RecorderAgent.from_config(cfg))
    for instruction in instructions:
        msg = f'Instruction Being Processed is - {instruction}'
        logger.info(msg)
        print(msg)
        state = await session.send_message(instruction)
        print(f'  -> {state.chatHistory[-1].content}')
    # endregion

    # region Steps -> POM Bundle
    state = session.state
    if state.steps and cfg.llm.has_credentials:
        files = await session.generate_code()
        if files:
            artifacts.save_generated_files(files)
    # endregion

    artifacts.save_steps(state.steps)
    steps_to_playwright_jsonl(state.steps, run_dir / "plan.playwright.jsonl")
    if cfg.logging.saveRunLog:
        artifacts.save_chat(state.chatHistory)

    print(f"\nSaved outputs to: {run_dir.resolve()}")
    print(" - plan.json")
    print(" - plan.playwright.jsonl")
    if cfg.logging.saveRunLog:
        print(" - chat.json")
    if state.generatedFiles:
        print(" - pom/")
    return run_dir


def main():
    init_logging()

    # region User Given Instructions In Plain English
    instructions = sys.argv[1:] or [
        "Navigate to saucedemo.com",
        "Login with valid credentials",
        "Add the first product to the cart and open the cart",
        "Verify the cart shows one item",
    ]
    # endregion

    asyncio.run(record(instructions))


# endregion


if __name__ == "__main__":
    main()
