"""Answer a scraped study article (w) with the LLM.

Input is the article JSON written by ``wolprep scrape w``. The result is

    {"general_idea": str, "answers": [AnswerItem], "teach_block_answers": {"1": str, ...}}

where every AnswerItem has a ``kind`` of "paragraph", "image" or
"supplement", the question's ``covered_ref`` and the parsed model answer.
"""

import json
import logging
from typing import Optional

from wolprep.generation.llm import ChatClient, user
from wolprep.generation.prompts import (
    ROLE_PROMPT, ONLY_JSON_PROMPT, OWN_WORDS_PROMPT,
    SINGLE_QUESTION_SCHEMA, MULTIPLE_QUESTIONS_SCHEMA,
    build_general_idea_prompt, build_single_question_prompt,
    build_multiple_questions_prompt, build_reference_kind_prompt,
    build_relevant_paragraphs_prompt, build_image_comment_prompt,
    build_supplement_comment_prompt, build_teach_block_prompt,
)

logger = logging.getLogger(__name__)

PARAGRAPH = "paragraph"
IMAGE = "image"
SUPPLEMENT = "supplement"


# ─── Paragraph selection ──────────────────────────────────────────────────────

def paragraphs_by_number(paragraphs: list) -> dict:
    """Paragraph number -> annotated text with its footnotes."""
    return {p["number"]: p["citation_data"]["text_with_refs_and_footnotes"] for p in paragraphs}


def paragraphs_for_question(by_number: dict, question: dict) -> list:
    texts = []
    for number in question["covered"]:
        if number not in by_number:
            logger.warning("question %s covers missing paragraph %s",
                           question["covered_ref"], number)
            continue
        texts.append(by_number[number])
    return texts


def find_figure_for_question(figures: list, question: dict) -> Optional[dict]:
    """First figure whose caption covers one of the question's paragraphs.

    Falls back to the section's first figure.
    """
    if not figures:
        return None
    covered = set(question["covered"])
    for figure in figures:
        ref = figure.get("paragraph_reference")
        if ref and covered.intersection(ref["covered"]):
            return figure
    return figures[0]


# ─── Answers ──────────────────────────────────────────────────────────────────

def generate_general_idea(llm: ChatClient, article: dict) -> str:
    return llm.text([ROLE_PROMPT, user(build_general_idea_prompt(article))])


def generate_question_answer(llm: ChatClient, question: dict, texts: list) -> dict:
    text = "\n".join(texts)
    if question["logical_count"] == 1:
        schema = SINGLE_QUESTION_SCHEMA
        prompt = build_single_question_prompt(question, text)
    else:
        schema = MULTIPLE_QUESTIONS_SCHEMA
        prompt = build_multiple_questions_prompt(question, text)
    return llm.json([ROLE_PROMPT, ONLY_JSON_PROMPT, schema, OWN_WORDS_PROMPT, user(prompt)])


def generate_reasoning(llm: ChatClient, prompt: str) -> dict:
    return llm.json([ONLY_JSON_PROMPT, user(prompt)])


def classify_material(llm: ChatClient, question: dict) -> dict:
    """Which material (image, supplement, video) the question points to."""
    return generate_reasoning(llm, build_reference_kind_prompt(question["text"]))


def paragraphs_for_image(llm: ChatClient, figure: dict, by_number: dict) -> list:
    """Paragraphs the image caption names, all paragraphs when it has no caption."""
    if not figure.get("caption"):
        return list(by_number.values())
    reasoning = generate_reasoning(llm, build_relevant_paragraphs_prompt(figure["caption"]))
    return [by_number[n] for n in reasoning.get("related_ones", []) if n in by_number]


def generate_material_comment(llm: ChatClient, prompt: str) -> dict:
    return llm.json([ROLE_PROMPT, ONLY_JSON_PROMPT, OWN_WORDS_PROMPT, user(prompt)])


def generate_image_comment(llm: ChatClient, question: dict, by_number: dict,
                           figures: list) -> Optional[dict]:
    figure = find_figure_for_question(figures, question)
    if figure is None:
        logger.warning("question %s refers to an image but the section has none",
                       question["covered_ref"])
        return None
    texts = paragraphs_for_image(llm, figure, by_number)
    return generate_material_comment(
        llm, build_image_comment_prompt(question, "\n".join(texts), figure))


def generate_supplement_comment(llm: ChatClient, question: dict, texts: list,
                                supplement: dict) -> dict:
    return generate_material_comment(
        llm, build_supplement_comment_prompt(question, "\n".join(texts), supplement))


def answer_item(kind: str, question: dict, answer: dict) -> dict:
    return {
        "kind": kind,
        "covered_ref": question["covered_ref"],
        "logical_count": question["logical_count"],
        "answer": answer,
    }


def answer_question(llm: ChatClient, question: dict, section: dict, by_number: dict,
                    results: list) -> None:
    """Append the paragraph answer, then a comment on the material the question points to.

    Each item lands in ``results`` as soon as it exists, so a failing
    material call keeps the paragraph answer.
    """
    texts = paragraphs_for_question(by_number, question)
    results.append(answer_item(PARAGRAPH, question, generate_question_answer(llm, question, texts)))

    if len(section["supplements"]) > 1:
        logger.error("section %r has %d supplements; only one is supported",
                     section["title"], len(section["supplements"]))
        return
    if not question["references"]:
        return

    material = classify_material(llm, question)
    if material.get("has_reference_to_image"):
        comment = generate_image_comment(llm, question, by_number, section["figures"])
        if comment is not None:
            results.append(answer_item(IMAGE, question, comment))
    elif material.get("has_reference_to_supplement") and section["supplements"]:
        comment = generate_supplement_comment(llm, question, texts, section["supplements"][0])
        results.append(answer_item(SUPPLEMENT, question, comment))
    elif material.get("has_reference_to_video"):
        logger.info("question %s refers to a video; skipped", question["covered_ref"])


def generate_paragraph_answers(llm: ChatClient, article: dict) -> list:
    """Answer every question of every section.

    A failing question is logged together with the answers gathered so far
    and the loop goes on with the next question.
    """
    results = []
    for i, section in enumerate(article["body"]):
        by_number = paragraphs_by_number(section["paragraphs"])
        for question in section["questions"]:
            logger.info("section %d: answering question %s", i + 1, question["covered_ref"])
            try:
                answer_question(llm, question, section, by_number, results)
            except Exception as e:
                logger.error("question %s failed: %s", question["covered_ref"], e)
                logger.info("answers so far:\n%s",
                            json.dumps(results, indent=2, ensure_ascii=False))
    return results


def generate_teach_block_answers(llm: ChatClient, article: dict) -> dict:
    all_text = "\n".join(
        p["citation_data"]["raw_text"]
        for section in article["body"] for p in section["paragraphs"]
    )
    prompt = build_teach_block_prompt(article["teach_block"]["items"], all_text)
    return llm.json([ROLE_PROMPT, ONLY_JSON_PROMPT, OWN_WORDS_PROMPT, user(prompt)])


def generate_ai_results(llm: ChatClient, article: dict) -> dict:
    logger.info("generating general idea")
    general_idea = generate_general_idea(llm, article)
    logger.info("generating paragraph answers")
    answers = generate_paragraph_answers(llm, article)
    logger.info("generating teach block answers")
    teach_block_answers = generate_teach_block_answers(llm, article)
    return {
        "general_idea": general_idea,
        "answers": answers,
        "teach_block_answers": teach_block_answers,
    }
