"""Teachings for the publication references of Study Bible verses (nwtsty).

Input:

    {"entries": [{"citation": "Sal. 3:1", "scripture": "...",
                  "references": [{"mnemonic": "w11 15/5 28", "ref_contents": "..."}]}]}

Output is one record per entry, each reference carrying its ``ai_reasoning``.
"""

import json
import logging

from wolprep.generation.llm import ChatClient, user
from wolprep.generation.prompts import (
    ROLE_PROMPT, ONLY_JSON_PROMPT, OWN_WORDS_PROMPT, build_teachings_prompt,
)

logger = logging.getLogger(__name__)


def generate_teachings(llm: ChatClient, citation: str, scripture: str, text: str) -> dict:
    prompt = build_teachings_prompt(citation, scripture, text)
    return llm.json([ROLE_PROMPT, ONLY_JSON_PROMPT, OWN_WORDS_PROMPT, user(prompt)])


def generate_ai_results(llm: ChatClient, data: dict) -> list:
    entries = data.get("entries", [])
    results = []
    logger.info("%d biblical references will be processed", len(entries))

    for i, entry in enumerate(entries):
        logger.debug("processing references for %r", entry["citation"])
        references = []
        results.append({
            "citation": entry["citation"],
            "scripture": entry["scripture"],
            "references": references,
        })

        refs = entry.get("references", [])
        for j, ref in enumerate(refs):
            try:
                reasoning = generate_teachings(
                    llm, entry["citation"], entry["scripture"], ref["ref_contents"])
            except Exception as e:
                logger.error("mnemonic %d of %d failed: %s", j + 1, len(refs), e)
                logger.info("results so far:\n%s", json.dumps(results, ensure_ascii=False))
                continue
            references.append({"mnemonic": ref["mnemonic"], "ai_reasoning": reasoning})
            logger.info("mnemonic %d of %d was processed", j + 1, len(refs))

        logger.info("biblical reference %d of %d was processed", i + 1, len(entries))
    return results
