"""Prompt templates for the study helpers.

All prompts are in Spanish; the answers are read by Spanish-speaking
congregations. JSON responses use snake_case keys so they can be rendered
without translation.
"""

from wolprep.generation.llm import system
from wolprep.scraping.citations import split_annotated_text


# ─── System prompts ───────────────────────────────────────────────────────────

ROLE_PROMPT = system(
    "Eres un asistente útil para el usuario con un conocimiento integral de las "
    "creencias de los testigos de Jehová, tal como se presentan en las publicaciones "
    "de la Watch Tower Bible and Tract Society of Pennsylvania. Debes aplicar el "
    "conocimiento en una variedad de tareas con la flexibilidad para adaptarse a "
    "diferentes objetivos. Aplica tu conocimiento profundo de las creencias de los "
    "testigos de Jehová, específicamente las descritas en las publicaciones de la "
    "Watch Tower Bible and Tract Society of Pennsylvania, para completar las tareas "
    "y objetivos."
)

ONLY_JSON_PROMPT = system(
    "Tus respuestas deben de ser única y exclusivamente en formato json."
)

OWN_WORDS_PROMPT = system(
    'Todos tus comentarios/respuestas deben estar escritos "en tus propias palabras", '
    "lo que significa expresar tu comprensión o interpretación del tema o texto usando "
    "tu propio lenguaje y estilo, en lugar de repetir o leer textualmente lo que está "
    "escrito. Ten en consideración que le estás escribiendo a testigos de Jehová que "
    "viven en Costa Rica y que tienen baja escolaridad."
)


# ─── Response schemas ─────────────────────────────────────────────────────────

SINGLE_QUESTION_SCHEMA = system("""Usa esta estructura JSON para tu respuesta:
{
  "cut_to_the_chase": " ... ",
  "has_multiple_points": boolean,
  "direct_answers": [
    "respuesta que cubre el punto/idea 1 de la respuesta o la respuesta completa",
    "respuesta que cubre el punto/idea 2",
    "..."
  ],
  "has_secondary": boolean,
  "secondary_comments": [
    "respuesta que cubre una idea secundaria",
    "... escribir más si es necesario ..."
  ],
  "has_main_quote": boolean,
  "main_quote_comment": " ... ",
  "has_secondary_quotes": boolean,
  "secondary_quote_comments": [" ... ", " ... "]
}""")

MULTIPLE_QUESTIONS_SCHEMA = system("""Usa esta estructura JSON para tu respuesta:
{
  "for_question_1": {
    "cut_to_the_chase": " ... ",
    "has_multiple_points": boolean,
    "direct_answers": ["...", "..."],
    "has_main_quote": boolean,
    "main_quote_comment": " ... "
  },
  "for_question_2": {},
  "for_question_n": {},
  "analysis_across_all_the_text": {
    "has_secondary": boolean,
    "secondary_comments": ["...", "..."],
    "has_secondary_quotes": boolean,
    "secondary_quote_comments": [" ... ", " ... "]
  }
}
Escribe un objeto "for_question_N" por cada pregunta, todos con el mismo formato que "for_question_1".
El objeto "analysis_across_all_the_text" es requerido y debe estar presente siempre.""")


# ─── Study article (w) ────────────────────────────────────────────────────────

GENERAL_IDEA_TEMPLATE = """Basado en la estructura y el avance del artículo, ¿cuál es la idea general del artículo?
___
# {title}
Texto temático: {main_cite}
Avance del artículo: {preview}
{sub_titles}
Títulos de recuadros con información suplementaria:
{supplement_titles}
"""

ANSWER_RULES = """- (cut_to_the_chase: string) Escribe una respuesta que responda plenamente la pregunta planteada de manera sencilla y directa.
- (has_multiple_points: boolean) Determina si la respuesta a la pregunta contiene varias "ideas" o "puntos" que conforman una sola respuesta larga.
- (direct_answers: string[]) Si "has_multiple_points" es true, escribe una respuesta para abordar un punto a la vez; si es false, escribe una única respuesta. En cualquier caso deben ser cortas, sencillas y directas.
- (has_main_quote: boolean) Determina si el párrafo contiene una cita bíblica principal (usualmente marcada como "lea", "léalo" o mencionada en la pregunta).
- (main_quote_comment: string) Si "has_main_quote" es true, escribe un comentario explicando la cita bíblica principal, su relación con la pregunta y la información delimitada, y sus aplicaciones en la vida diaria como cristiano."""

SECONDARY_RULES = """- (has_secondary: boolean) Considerando las respuestas anteriores, determina si hay una o varias ideas secundarias de relativa importancia en la información delimitada que no fueron abordadas.
- (secondary_comments: string[]) Si "has_secondary" es true, escribe un comentario para cada idea; si es false este array debe estar vacío.
- (has_secondary_quotes: boolean) Determina si la información delimitada contiene citas bíblicas secundarias (distintas a la cita principal) que apoyen puntos importantes que no se han cubierto.
- (secondary_quote_comments: string[]) Si "has_secondary_quotes" es true, escribe un comentario explicando cada una, enfocándote en su relación con la pregunta y la información delimitada y en sus aplicaciones en la vida diaria como cristiano."""

SINGLE_QUESTION_TEMPLATE = """Usando únicamente la información delimitada por ### y su respectiva pregunta: '{question}'.
Escribe cada parte del JSON apegado a estas indicaciones:
{answer_rules}
{secondary_rules}
###
{text}
###"""

MULTIPLE_QUESTIONS_TEMPLATE = """Usando únicamente la información delimitada por ### vas a responder las siguientes preguntas:
{questions}
Para cada respuesta escribe un objeto donde cada parte del JSON esté apegada a estas indicaciones:
{answer_rules}

Escribe un único objeto "analysis_across_all_the_text" donde se aborda toda la información delimitada como una sola unidad.
Dentro de "analysis_across_all_the_text" usa estas indicaciones:
{secondary_rules}
###
{text}
###"""

REFERENCE_KIND_TEMPLATE = """El texto delimitado por ### hace varias preguntas y menciona algo que hay que ver (usualmente dentro de paréntesis).
Clasifica lo que hay que ver en una de tres categorías:
- has_reference_to_image: si se indica que debería verse una imagen.
- has_reference_to_supplement: si se indica que debería verse un recuadro.
- has_reference_to_video: si se indica que debería verse un video.
Las menciones a cualquier otra cosa deben ignorarse.
Responde usando este formato:
{{"has_reference_to_image": boolean, "has_reference_to_supplement": boolean, "has_reference_to_video": boolean}}

###
{question}
###"""

RELEVANT_PARAGRAPHS_TEMPLATE = """Este texto: '{caption}' dice que hay unos párrafos relacionados.
Escribe un objeto JSON donde estén definidos los párrafos relacionados.
Estos son ejemplos de lo que quiero:
- {{"related_ones": ["1"]}}: indica un único párrafo relevante
- {{"related_ones": ["15", "16"]}}: indica dos párrafos relevantes
- {{"related_ones": ["7", "8", "9"]}}: indica tres párrafos relevantes (cuando se define un rango de párrafos)"""

TEACHINGS_FORMAT = """Usa este formato JSON para tu respuesta:
{{
  "teachings": ["..."]
}}
Escribe uno o más comentarios cortos, sencillos y directos; el objetivo es resaltar qué enseña {subject} en el contexto y si hay aplicaciones prácticas para la vida diaria como cristiano."""

IMAGE_COMMENT_TEMPLATE = """Considerando que se está analizando la información delimitada por ### con la(s) pregunta(s): '{question}'.
Escribe un comentario sobre la imagen a la que se hace referencia.
{teachings_format}
Esto es lo que se sabe de la imagen:
{figure}
###
{text}
###"""

SUPPLEMENT_COMMENT_TEMPLATE = """Considerando que se está analizando la información delimitada por ### con la(s) pregunta(s): '{question}'.
Escribe un comentario sobre el recuadro (delimitado por @@@) al que se hace referencia.
{teachings_format}
@@@
# {title}
{contents}
@@@
###
{text}
###"""

TEACH_BLOCK_TEMPLATE = """Considerando únicamente la información delimitada por ### escribe una respuesta clara, sencilla y directa para las siguientes preguntas:
{questions}

Tu respuesta debe estar en formato JSON con esta forma:
{{
  "1": " ... respuesta a pregunta 1 ...",
  "2": " ... respuesta a pregunta 2 ...",
  "n": " ... respuesta a pregunta n ..."
}}

###
{text}
###"""


def numbered(items: list) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1))


def describe_figure(figure: dict) -> str:
    """Known facts about an image, one line each, skipping empty ones."""
    lines = []
    if figure.get("image_alt"):
        lines.append(f"image_alt: {figure['image_alt']}")
    if figure.get("caption"):
        lines.append(f"título o leyenda que describe la imagen: {figure['caption']}")
    if figure.get("footnote_description"):
        lines.append(f"descripción de la imagen según autores: {figure['footnote_description']}")
    return "".join(line + "\n" for line in lines)


def build_general_idea_prompt(article: dict) -> str:
    supplement_titles = [
        f"### {sup['title']}"
        for section in article["body"] for sup in section["supplements"]
    ]
    return GENERAL_IDEA_TEMPLATE.format(
        title=article["title"],
        main_cite=article["main_cite"],
        preview=article["preview"],
        sub_titles="\n".join(f"## {sub}" for sub in article["sub_titles"]),
        supplement_titles="\n".join(supplement_titles).strip(),
    )


def build_single_question_prompt(question: dict, text: str) -> str:
    return SINGLE_QUESTION_TEMPLATE.format(
        question=question["text"],
        answer_rules=ANSWER_RULES,
        secondary_rules=SECONDARY_RULES,
        text=text,
    )


def build_multiple_questions_prompt(question: dict, text: str) -> str:
    return MULTIPLE_QUESTIONS_TEMPLATE.format(
        questions=numbered(question["lettered_texts"]),
        answer_rules=ANSWER_RULES,
        secondary_rules=SECONDARY_RULES,
        text=text,
    )


def build_reference_kind_prompt(question_text: str) -> str:
    return REFERENCE_KIND_TEMPLATE.format(question=question_text)


def build_relevant_paragraphs_prompt(caption: str) -> str:
    return RELEVANT_PARAGRAPHS_TEMPLATE.format(caption=caption)


def build_image_comment_prompt(question: dict, text: str, figure: dict) -> str:
    return IMAGE_COMMENT_TEMPLATE.format(
        question=question["text"],
        teachings_format=TEACHINGS_FORMAT.format(subject="esta imagen"),
        figure=describe_figure(figure),
        text=text,
    )


def build_supplement_comment_prompt(question: dict, text: str, supplement: dict) -> str:
    return SUPPLEMENT_COMMENT_TEMPLATE.format(
        question=question["text"],
        teachings_format=TEACHINGS_FORMAT.format(subject="este recuadro"),
        title=supplement["title"],
        contents=supplement["contents"],
        text=text,
    )


def build_teach_block_prompt(items: list, text: str) -> str:
    return TEACH_BLOCK_TEMPLATE.format(questions=numbered(items), text=text)


# ─── Workbook talk (mwb) ──────────────────────────────────────────────────────

SPEECH_MATERIAL_TEMPLATE = """Este es el material para un discurso, está delimitado por ***. El h1 es el título del discurso, los h2 son los puntos clave y también especifican los textos clave (deben ser leídos). Los h2 también contienen referencias a otras publicaciones que forman el material base para cada punto clave del discurso.

***
# {title}
{points}
{first_level}

El material audiovisual asociado al discurso incluye {figures_intro}:
{figures}
---
{second_level}
***"""

SPEECH_GOAL_PROMPT = (
    "Basado en el material del discurso quiero que escribas qué busca enseñar el "
    "discurso; sé conciso pero sin sacrificar puntos clave."
)

SPEECH_INTROS_TEMPLATE = """Basado en el material del discurso quiero que escribas {count} posibles introducciones al discurso.
Cada una de tus introducciones debe captar la atención, indicar con claridad el tema del que se hablará y mostrar por qué este tema debería interesar a los oyentes.
Para captar la atención escoge una de las siguientes: una pregunta, una afirmación, un refrán relevante al tema, una noticia del pasado relevante al tema o una historia breve; en cualquier caso se busca despertar el interés de los oyentes.
Ten en cuenta que el objetivo del discurso es: `{goal}`

Tu respuesta debe ser entregada en formato JSON de esta forma:
{{
  "intros": [
    "... intro 1 ...",
    "... intro 2 ...",
    "... intro n ..."
  ]
}}"""


def build_speech_material_prompt(material: dict) -> str:
    points, first_level, second_level = [], [], []
    for mp in material["main_points"]:
        data = mp["citation_data"]
        points.append(f"## {data['text_with_refs_only']}")
        _, first, second = split_annotated_text(data["text_with_refs_and_footnotes_2_levels"])
        first_level.append(first)
        if second:
            second_level.append(second)

    figures = material["figures"]
    figures_intro = ("la siguiente imagen" if len(figures) == 1
                     else "las siguientes imágenes")
    return SPEECH_MATERIAL_TEMPLATE.format(
        title=material["title"],
        points="\n".join(points),
        first_level="\n".join(first_level),
        figures_intro=figures_intro,
        figures="\n".join(describe_figure(f) for f in figures),
        second_level="\n".join(second_level),
    )


def build_speech_intros_prompt(goal: str, count: int = 10) -> str:
    return SPEECH_INTROS_TEMPLATE.format(goal=goal, count=count)


# ─── Study Bible references (nwtsty) ──────────────────────────────────────────

TEACHINGS_TEMPLATE = """Analiza la información delimitada por ### que fue usada en relación al texto bíblico de '{citation}' y que dice: '{scripture}'.
Quiero que expliques:
- (whats_the_relationship) por qué la información delimitada usó el texto bíblico
- (how_the_bible_supports_the_reference) de qué manera apoya el texto bíblico el argumento de la información delimitada
- (what_can_we_learn) qué enseñanzas tiene la información delimitada que se puedan considerar perlas espirituales

Tu respuesta debe ser entregada usando este formato de JSON:
{{
  "whats_the_relationship": " ... ",
  "how_the_bible_supports_the_reference": " ... ",
  "what_can_we_learn": [" ... ", " ... "]
}}

###
{text}
###"""


def build_teachings_prompt(citation: str, scripture: str, text: str) -> str:
    return TEACHINGS_TEMPLATE.format(citation=citation, scripture=scripture, text=text)
