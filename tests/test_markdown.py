"""Tests for the markdown renderers."""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from wolprep.rendering.markdown import (
    render_study_answers, render_answer_item, render_lettered_answer, render_single_answer,
    render_reference_study, render_meeting_comments, render_meeting_comments_chat,
    render_speech_intros,
)


ARTICLE = {
    "article_num": "ARTÍCULO DE ESTUDIO 10",
    "title": "Jehová escucha",
    "teach_block": {"title": "¿QUÉ RESPONDERÍA?", "items": ["¿Por qué oramos?", "¿Cómo escucha?"]},
}

SINGLE = {
    "cut_to_the_chase": "Porque nos ama.",
    "has_multiple_points": True,
    "direct_answers": ["Nos escucha.", "Nos responde."],
    "has_secondary": False,
    "secondary_comments": [],
    "has_main_quote": True,
    "main_quote_comment": "Juan 3:16 muestra su amor.",
    "has_secondary_quotes": False,
    "secondary_quote_comments": [],
}

LETTERED = {
    "for_question_1": {"cut_to_the_chase": "Oró.", "has_multiple_points": False, "has_main_quote": False},
    "for_question_2": {"cut_to_the_chase": "Confiaba.", "has_multiple_points": True,
                       "direct_answers": ["En Jehová."], "has_main_quote": False},
    "analysis_across_all_the_text": {"has_secondary": True, "secondary_comments": ["Perseveró."],
                                     "has_secondary_quotes": False},
}

NWTSTY = [{
    "citation": "Sal. 3:1",
    "scripture": "Oh, Jehová...",
    "references": [{"mnemonic": "w11 15/5 28", "ai_reasoning": {
        "whats_the_relationship": "Relación.",
        "how_the_bible_supports_the_reference": "Apoyo.",
        "what_can_we_learn": ["Confiar.", "Orar."],
    }}],
}]


class TestStudyAnswers:
    def test_single_answer(self):
        out = render_single_answer(SINGLE)
        assert out.startswith("🎯💥 Porque nos ama.\n\n")
        assert "\t🎯 Nos escucha.\n\t🎯 Nos responde." in out
        assert "\t✍️ Juan 3:16 muestra su amor." in out
        assert "2️⃣" not in out

    def test_lettered_answer_uses_letters(self):
        out = render_lettered_answer(LETTERED)
        assert "Pregunta A:\n\t🎯💥 Oró." in out
        assert "Pregunta B:\n\t🎯💥 Confiaba." in out
        assert "\t🎯 En Jehová." in out
        assert "\t2️⃣ Perseveró." in out

    def test_lettered_answer_without_analysis(self):
        out = render_lettered_answer({"for_question_1": {"cut_to_the_chase": "Sí."}})
        assert out == "Pregunta A:\n\t🎯💥 Sí.\n"

    def test_image_item(self):
        item = {"kind": "image", "covered_ref": "5, 6", "answer": {"teachings": ["Oremos."]}}
        assert render_answer_item(item) == "⟾⟾ 5, 6 sobre la imagen ⟽⟽\n\t🎯 Oremos.\n"

    def test_supplement_item(self):
        item = {"kind": "supplement", "covered_ref": "7", "answer": {"teachings": ["Lea."]}}
        assert render_answer_item(item).startswith("⟾⟾ 7 sobre el recuadro ⟽⟽\n")

    def test_full_document(self):
        results = {
            "general_idea": "Dios escucha.",
            "answers": [{"kind": "paragraph", "covered_ref": "1", "logical_count": 1, "answer": SINGLE}],
            "teach_block_answers": {"1": "Porque nos ama.", "2": "Con atención."},
        }
        out = render_study_answers(ARTICLE, results)
        assert out.startswith("ARTÍCULO DE ESTUDIO 10: *Jehová escucha*\n\n")
        assert "*Idea general del artículo*:\nDios escucha." in out
        assert "Formato:" in out
        assert "⟾⟾ 1 ⟽⟽\n🎯💥 Porque nos ama." in out
        assert "*¿QUÉ RESPONDERÍA?*" in out
        assert out.endswith("¿Por qué oramos?\n\t🎯💥 Porque nos ama.\n\n¿Cómo escucha?\n\t🎯💥 Con atención.")


class TestReferenceStudy:
    def test_reference_study(self):
        out = render_reference_study(NWTSTY)
        assert "## Sal. 3:1\n> Oh, Jehová...\n" in out
        assert "### w11 15/5 28" in out
        assert "Relación." in out
        assert "- Confiar.\n- Orar." in out

    def test_meeting_comments(self):
        out = render_meeting_comments(NWTSTY)
        assert "### ¿Qué podemos aprender?\n- Confiar.\n- Orar." in out
        assert "Relación." not in out

    def test_meeting_comments_chat(self):
        out = render_meeting_comments_chat(NWTSTY)
        assert out.startswith("Comentarios para *Sal. 3*\n")
        assert "*Sal. 3:1*\n> Oh, Jehová...\n\n_¿Qué podemos aprender?_\n- Confiar." in out
        assert out.endswith("- Orar.\n")

    def test_meeting_comments_chat_empty(self):
        assert render_meeting_comments_chat([]) == ""


class TestSpeechIntros:
    def test_render(self):
        material = {"title": "Sea un buen maestro"}
        results = {"speech_goal": "Enseñar.", "speech_intros": {"intros": ["Uno.", "Dos."]}}
        out = render_speech_intros(material, results)
        assert out == (
            "# Sea un buen maestro\n\n"
            "## Objetivo del discurso\nEnseñar.\n\n"
            "## Introducciones\n1. Uno.\n2. Dos.\n"
        )
