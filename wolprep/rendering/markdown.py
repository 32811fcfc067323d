"""Render LLM results as markdown (and chat-friendly text).

Emoji legend used for study answers:

    🎯💥  the straight answer to the question
    🎯    points that answer the question
    2️⃣    a secondary idea of the paragraph
    ✍️    comment on the main scripture
    ✍️2️⃣  comment on a secondary scripture
"""

LEGEND = """Formato:
🎯💥 La respuesta al grano para la pregunta.
🎯 Puntos que responden la pregunta.
2️⃣ Comentario de una idea secundaria del párrafo.
✍️ Comentario del texto principal.
✍️2️⃣ Comentario de un texto secundario.
"""

LETTERS = "ABCDE"
ANALYSIS_KEY = "analysis_across_all_the_text"


def _bullets(items: list, marker: str) -> str:
    return "\n".join(f"\t{marker} {item}" for item in items)


# ─── Study article answers (w) ────────────────────────────────────────────────

def _question_letter(key: str) -> str:
    number = key.replace("for_question_", "")
    if number.isdigit() and 1 <= int(number) <= len(LETTERS):
        return LETTERS[int(number) - 1]
    return number


def render_single_answer(answer: dict) -> str:
    out = f"🎯💥 {answer.get('cut_to_the_chase', '')}\n\n"
    if answer.get("has_multiple_points"):
        out += _bullets(answer.get("direct_answers", []), "🎯") + "\n"
    if answer.get("has_secondary"):
        out += "\n" + _bullets(answer.get("secondary_comments", []), "2️⃣") + "\n"
    if answer.get("has_main_quote"):
        out += f"\n\t✍️ {answer.get('main_quote_comment', '')}\n"
    if answer.get("has_secondary_quotes"):
        out += "\n" + _bullets(answer.get("secondary_quote_comments", []), "✍️2️⃣") + "\n"
    return out


def render_lettered_answer(answer: dict) -> str:
    out = ""
    for key, response in answer.items():
        if key == ANALYSIS_KEY:
            continue
        out += f"Pregunta {_question_letter(key)}:\n\t🎯💥 {response.get('cut_to_the_chase', '')}\n"
        if response.get("has_multiple_points"):
            out += "\n" + _bullets(response.get("direct_answers", []), "🎯")
        if response.get("has_main_quote"):
            out += f"\n\n\t✍️ {response.get('main_quote_comment', '')}\n"

    analysis = answer.get(ANALYSIS_KEY)
    if not analysis:
        return out
    if analysis.get("has_secondary"):
        out += "\n" + _bullets(analysis.get("secondary_comments", []), "2️⃣") + "\n"
    if analysis.get("has_secondary_quotes"):
        out += "\n" + _bullets(analysis.get("secondary_quote_comments", []), "✍️2️⃣") + "\n"
    return out


def render_answer_item(item: dict) -> str:
    out = f"⟾⟾ {item['covered_ref']} "
    if item["kind"] == "image":
        return out + "sobre la imagen ⟽⟽\n" + _bullets(item["answer"].get("teachings", []), "🎯") + "\n"
    if item["kind"] == "supplement":
        return out + "sobre el recuadro ⟽⟽\n" + _bullets(item["answer"].get("teachings", []), "🎯") + "\n"
    out += "⟽⟽\n"
    if item.get("logical_count", 1) == 1:
        return out + render_single_answer(item["answer"])
    return out + render_lettered_answer(item["answer"])


def render_study_answers(article: dict, results: dict) -> str:
    teach_block = article["teach_block"]
    teach_answers = results.get("teach_block_answers", {})
    teach_lines = [
        f"{q}\n\t🎯💥 {teach_answers.get(str(i), '')}"
        for i, q in enumerate(teach_block["items"], 1)
    ]
    return (
        f"{article['article_num']}: *{article['title']}*\n\n"
        f"*Idea general del artículo*:\n{results['general_idea']}\n\n"
        f"{LEGEND}\n"
        + "\n".join(render_answer_item(item) for item in results["answers"])
        + f"\n\n*{teach_block['title']}*\n\n"
        + "\n\n".join(teach_lines)
    )


# ─── Study Bible references (nwtsty) ──────────────────────────────────────────

def render_reference_study(results: list) -> str:
    lines = [""]
    for entry in results:
        lines += [f"## {entry['citation']}", f"> {entry['scripture']}", ""]
        for ref in entry["references"]:
            reasoning = ref["ai_reasoning"]
            lines += [
                f"### {ref['mnemonic']}",
                "#### ¿Cómo se relaciona el material de referencia con el texto bíblico?",
                reasoning.get("whats_the_relationship", ""),
                "",
                "#### ¿Cómo respalda el texto bíblico el análisis o las conclusiones del material de referencia?",
                reasoning.get("how_the_bible_supports_the_reference", ""),
                "",
                "#### ¿Qué podemos aprender?",
            ]
            lines += [f"- {t}" for t in reasoning.get("what_can_we_learn", [])]
            lines.append("")
        lines.append("")
    return "\n".join(lines)


def _learnings(entry: dict) -> list:
    return [
        f"- {t}"
        for ref in entry["references"]
        for t in ref["ai_reasoning"].get("what_can_we_learn", [])
    ]


def render_meeting_comments(results: list) -> str:
    lines = [""]
    for entry in results:
        lines += [f"## {entry['citation']}", f"> {entry['scripture']}", "",
                  "### ¿Qué podemos aprender?"]
        lines += _learnings(entry)
        lines.append("")
    return "\n".join(lines)


def render_meeting_comments_chat(results: list) -> str:
    """Same comments with chat-app formatting (*bold*, _italic_)."""
    if not results:
        return ""
    book = results[0]["citation"].split(":")[0]
    lines = [f"Comentarios para *{book}*", "", ""]
    for entry in results:
        lines += [f"*{entry['citation']}*", f"> {entry['scripture']}", "",
                  "_¿Qué podemos aprender?_"]
        lines += _learnings(entry)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


# ─── Workbook talk (mwb) ──────────────────────────────────────────────────────

def render_speech_intros(material: dict, results: dict) -> str:
    intros = results["speech_intros"].get("intros", [])
    out = f"# {material['title']}\n\n"
    out += f"## Objetivo del discurso\n{results['speech_goal']}\n\n"
    out += "## Introducciones\n"
    out += "\n".join(f"{i}. {intro}" for i, intro in enumerate(intros, 1))
    return out + "\n"
