"""wolprep configuration: site selectors, model settings and paths."""

import os

# ─── Paths ────────────────────────────────────────────────────────────────────

# Every command writes into its own timestamped folder under RUNS_DIR
RUNS_DIR = os.environ.get("WOLPREP_RUNS_DIR", os.path.join(os.getcwd(), "runs"))

RUN_FOLDERS = {
    "scrape_w": "pub_w_scrape",
    "scrape_bt": "pub_bt_scrape",
    "scrape_mwb": "pub_mwb_scrape",
    "solve_w": "watchtower_ai_runs",
    "solve_mwb": "pub_mwb_ai",
    "solve_nwtsty": "biblical_book_ai_runs",
}

# ─── Logging ──────────────────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("WOLPREP_LOG_LEVEL", "INFO")
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"

# ─── Site ─────────────────────────────────────────────────────────────────────

WOL_DOMAIN = "wol.jw.org"
WOL_BASE_URL = f"https://{WOL_DOMAIN}"
WOL_HOME_URL = f"{WOL_BASE_URL}/es/"

# Referrer sent with reference lookups, the endpoint rejects bare requests
REFERENCE_REFERRER = f"{WOL_BASE_URL}/es/wol/b/r4/lp-s/nwtsty/18/15"
REFERENCE_HEADERS = {
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Referer": REFERENCE_REFERRER,
}
REFERENCE_TIMEOUT = 30

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)
BROWSER_LANG = "es-CR,es"
BROWSER_SLOW_MO_DEBUG = 25  # ms between actions when running headed

# Playwright waits, milliseconds
NAVIGATION_TIMEOUT = 30000
TOOLTIP_TIMEOUT = 5000

# ─── Selectors ────────────────────────────────────────────────────────────────

SELECTORS = {
    # navigation
    "today_link": "#menuToday",
    "this_week_w": ".todayItems .todayItem.pub-w .it",
    "cookie_popup": ".lnc-firstRunPopup",
    "cookie_accept": "button.lnc-acceptCookiesButton",
    # tooltip surface
    "tooltip_content": ".tooltipContent",
    "tooltip_close": ".tooltipContainer .closeBtn",
    # article layout
    "article": "#article",
    "sub_titles": ".section > h2",
    "sections": ".bodyTxt .section",
    "paragraphs": ".sb",
    "paragraph_number": ".parNum sup",
    "questions": ".qu",
    "figures": '.pGroup > div[id*="f"] figure',
    "supplements": ".boxSupplement",
    "supplement_title": ".boxTtl",
    "supplement_content": ".boxContent",
    "teach_title": ".blockTeach.rule .boxTtl",
    "teach_items": ".blockTeach.rule ul li",
    "preview_footnote": "#p5 .fn",
    # midweek workbook
    "speech_area": "#tt8",
    "speech_sub_titles": 'div[id*="tt"]:not(.du-color--textSubdued) > p',
    "speech_figures": 'div[id*="f"] figure',
    "period": ".resultsNavigationSelected:not(.navPublications)",
}

# Links that open a scripture tooltip inside running text
CITATION_LINK_SELECTOR = "a.b"
FOOTNOTE_LINK_SELECTOR = "a.fn"

BIBLE_CITATION_CLASS = "bibleCitation"
PUBLICATION_CITATION_CLASS = "publicationCitation"

# ─── Captions ─────────────────────────────────────────────────────────────────
# Figure captions end in "(párrafo 4)", "(párrafos 5 y 6)" or "(párrafos 7 a 9)"

CAPTION_PARAGRAPH_WORD = r"párrafos?"
CAPTION_DOUBLE_WORD = "y"
CAPTION_RANGE_WORD = "a"

# ─── LLM ──────────────────────────────────────────────────────────────────────

OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
MODEL = os.environ.get("WOLPREP_MODEL", "gpt-3.5-turbo-0125")
MODEL_STRONG = os.environ.get("WOLPREP_MODEL_STRONG", "gpt-4-turbo")
MAX_TOKENS = 1000
MAX_TOKENS_JSON = 2000
