"""Tests for the publication extractors over static HTML snapshots."""

import sys
import os
import json
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from bs4 import BeautifulSoup

from wolprep.errors import TooltipError
from wolprep.scraping.citations import CiteCounter, TooltipReader
from wolprep.scraping.publications import (
    extract_sections, read_study_article, read_book_chapter, read_speech_material, to_json,
    incomplete_containers,
)


# ─── Test fixtures ────────────────────────────────────────────────────────────

ARTICLE = """
<div id="article">
<p id="p1">ARTÍCULO DE ESTUDIO 10</p>
<h1 id="p2">Jehová escucha nuestras oraciones</h1>
<p id="p3">“Oren sin cesar” (1 Tes. 5:17).</p>
<p id="p4">CANCIÓN 41</p>
<p id="p5">AVANCE <a class="fn" data-fnid="1">*</a></p>
<div id="footnote1">* Veremos cómo orar con confianza.</div>
<div class="bodyTxt">
  <div class="section">
    <h2>Oramos con confianza</h2>
    <div class="pGroup">
      <p class="qu"><strong>1, 2.</strong> ¿Por qué oramos? (Vea también la imagen).</p>
      <p class="sb"><span class="parNum"><sup>1</sup></span> Lea <a class="b" href="/es/a">Juan 3:16</a>.</p>
      <p class="sb"><span class="parNum"><sup>2</sup></span> Dios escucha.</p>
      <div id="f1"><figure><img alt="Una hermana ora"><figcaption>Una hermana ora. (Vea el párrafo 2).</figcaption></figure></div>
    </div>
  </div>
  <div class="section">
    <h2>Seguimos orando</h2>
    <p class="qu"><strong>3.</strong> ¿Qué haremos?</p>
    <p class="sb"><span class="parNum"><sup>3</sup></span> Oremos siempre <a class="b" href="/es/b">Rom. 12:12</a>.</p>
    <div class="boxSupplement"><h2 class="boxTtl">Ideas para orar</h2><div class="boxContent">Ore a diario.</div></div>
  </div>
</div>
<div class="blockTeach rule"><h2 class="boxTtl">¿QUÉ RESPONDERÍA?</h2><ul><li>¿Por qué oramos?</li></ul></div>
</div>
"""

SPEECH = """
<p class="resultsNavigationSelected">2-8 DE SEPTIEMBRE</p>
<div id="tt8">
  <h3>4. Sea un buen maestro</h3>
  <div id="tt9"><p>Use <a href="/es/pub">lmd lección 3</a> y <a class="b" href="/es/b">Mat. 5:3</a>.</p></div>
  <div id="tt10"><p>Escuche bien.</p></div>
  <div id="f2"><figure><img alt="Un hermano enseña"></figure></div>
</div>
"""

BIBLE_TOOLTIP = '<div class="bibleCitation"><p><span>1 </span>Texto bíblico.</p></div>'
PUBLICATION_TOOLTIP = (
    '<div class="publicationCitation"><p>Lección sobre '
    '<a class="b" href="/es/n">Sant. 1:19</a>.</p></div>'
)


class CannedReader(TooltipReader):
    def __init__(self, tooltips, fail=False):
        self.tooltips = tooltips
        self.fail = fail

    def read(self, index):
        if self.fail:
            raise TooltipError("tooltip timed out")
        return self.tooltips[index]


def _bible_readers(i, j):
    return CannedReader([BIBLE_TOOLTIP])


def _soup(html):
    return BeautifulSoup(html, "html.parser")


# ═══════════════════════════════════════════════════════════════════════════════
# STUDY ARTICLE
# ═══════════════════════════════════════════════════════════════════════════════

class TestStudyArticle:
    def test_header_fields(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        assert article.article_num == "ARTÍCULO DE ESTUDIO 10"
        assert article.title == "Jehová escucha nuestras oraciones"
        assert article.main_cite == "“Oren sin cesar” (1 Tes. 5:17)."
        assert article.preview == "Veremos cómo orar con confianza."
        assert article.sub_titles == ["Oramos con confianza", "Seguimos orando"]

    def test_sections(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        first, second = article.body
        assert first.title == "Oramos con confianza"
        assert [p.number for p in first.paragraphs] == ["1", "2"]
        assert first.paragraphs[0].text == "Lea Juan 3:16."
        assert first.questions[0].covered == ["1", "2"]
        assert first.questions[0].references == ["Vea también la imagen"]
        assert first.figures[0].paragraph_reference.covered == ["2"]
        assert second.supplements[0].title == "Ideas para orar"
        assert second.figures == []

    def test_cite_numbers_run_across_sections(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        first_cite = article.body[0].paragraphs[0].citation_data.citations[0]
        second_cite = article.body[1].paragraphs[0].citation_data.citations[0]
        assert first_cite.cite_num == 1
        assert second_cite.cite_num == 2
        assert first_cite.cited_text == "Texto bíblico."

    def test_teach_block(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        assert article.teach_block.title == "¿QUÉ RESPONDERÍA?"
        assert article.teach_block.items == ["¿Por qué oramos?"]

    def test_serializes_to_json(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        data = json.loads(json.dumps(to_json(article), ensure_ascii=False))
        paragraph = data["body"][0]["paragraphs"][0]
        assert paragraph["citation_data"]["text_with_refs_only"] == "1 Lea Juan 3:16 [^1]."
        assert data["body"][0]["questions"][0]["coverage_type"] == "double"


class TestSectionFailures:
    def test_failed_paragraph_keeps_partial_and_continues(self):
        def readers(i, j):
            return CannedReader([BIBLE_TOOLTIP], fail=(i == 0 and j == 0))

        sections = extract_sections(_soup(ARTICLE), CiteCounter(), readers)
        failed = sections[0].paragraphs[0].citation_data
        assert not failed.complete
        assert failed.citations == []
        later = sections[1].paragraphs[0].citation_data
        assert later.complete
        # the failed link consumed number 1
        assert later.citations[0].cite_num == 2

    def test_incomplete_containers_counted(self):
        def readers(i, j):
            return CannedReader([BIBLE_TOOLTIP], fail=(i == 0 and j == 0))

        article = read_study_article(_soup(ARTICLE), CiteCounter(), readers)
        assert incomplete_containers(article) == 1

    def test_complete_article_has_none(self):
        article = read_study_article(_soup(ARTICLE), CiteCounter(), _bible_readers)
        assert incomplete_containers(article) == 0
        chapter = read_book_chapter(_soup(ARTICLE), CiteCounter(), _bible_readers)
        assert incomplete_containers(chapter) == 0


# ═══════════════════════════════════════════════════════════════════════════════
# BOOK CHAPTER
# ═══════════════════════════════════════════════════════════════════════════════

class TestBookChapter:
    def test_fields(self):
        chapter = read_book_chapter(_soup(ARTICLE), CiteCounter(), _bible_readers)
        assert chapter.chapter_num == "ARTÍCULO DE ESTUDIO 10"
        assert chapter.opening_content == "“Oren sin cesar” (1 Tes. 5:17)."
        assert chapter.theme_scripture == "CANCIÓN 41"
        assert len(chapter.sections) == 2


# ═══════════════════════════════════════════════════════════════════════════════
# WORKBOOK TALK
# ═══════════════════════════════════════════════════════════════════════════════

class TestSpeechMaterial:
    def _read(self, fetch=None):
        def readers(i):
            return CannedReader([PUBLICATION_TOOLTIP, BIBLE_TOOLTIP])
        return read_speech_material(_soup(SPEECH), CiteCounter(), readers, fetch)

    def test_fields(self):
        material = self._read()
        assert material.period == "2-8 DE SEPTIEMBRE"
        assert material.title == "Sea un buen maestro"
        assert material.figures[0].image_alt == "Un hermano enseña"
        assert [mp.sub_title for mp in material.main_points] == [
            "Use lmd lección 3 y Mat. 5:3.", "Escuche bien."]

    def test_every_link_is_a_citation(self):
        material = self._read()
        citations = material.main_points[0].citation_data.citations
        assert [c.link.link_text for c in citations] == ["lmd lección 3", "Mat. 5:3"]
        assert citations[0].is_publication_citation

    def test_publication_nested_links_expanded(self):
        material = self._read(fetch=lambda href: "Sean rápidos para escuchar.")
        data = material.main_points[0].citation_data
        pub, bible = data.citations
        assert pub.cite_num == 1
        assert pub.nested[0].cite_num == 2
        assert bible.cite_num == 3
        assert pub.cited_text == "Lección sobre Sant. 1:19 [^2]."
        assert data.text_with_refs_and_footnotes_2_levels.endswith(
            "---\n[^2]: Sean rápidos para escuchar.\n")

    def test_failed_point_counted_as_incomplete(self):
        def readers(i):
            return CannedReader([], fail=(i == 0))
        material = read_speech_material(_soup(SPEECH), CiteCounter(), readers)
        assert incomplete_containers(material) == 1

    def test_missing_speech_area(self):
        with pytest.raises(ValueError):
            read_speech_material(_soup("<p>vacío</p>"), CiteCounter(), lambda i: CannedReader([]))
