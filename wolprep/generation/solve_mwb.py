"""Speech goal and introductions for a workbook talk (mwb)."""

import logging

from wolprep.generation.llm import ChatClient, user
from wolprep.generation.prompts import (
    ROLE_PROMPT, SPEECH_GOAL_PROMPT,
    build_speech_material_prompt, build_speech_intros_prompt,
)

logger = logging.getLogger(__name__)


def generate_speech_goal(llm: ChatClient, material: dict) -> str:
    return llm.text([
        ROLE_PROMPT,
        user(build_speech_material_prompt(material)),
        user(SPEECH_GOAL_PROMPT),
    ])


def generate_speech_intros(llm: ChatClient, material: dict, goal: str) -> dict:
    """Ten candidate openings, ``{"intros": [...]}``, from the stronger model."""
    return llm.json([
        ROLE_PROMPT,
        user(build_speech_material_prompt(material)),
        user(build_speech_intros_prompt(goal)),
    ], strong=True)


def generate_ai_results(llm: ChatClient, material: dict) -> dict:
    logger.info("generating speech goal")
    goal = generate_speech_goal(llm, material)
    logger.info("speech goal generated")

    logger.info("generating speech intros")
    intros = generate_speech_intros(llm, material, goal)
    logger.info("speech intros generated")

    return {"speech_goal": goal, "speech_intros": intros}
