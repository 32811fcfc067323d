"""wolprep CLI: scrape WOL publications and prepare study answers.

Usage:
    wolprep scrape w [--article-url URL] [--debug]
    wolprep scrape bt --article-url URL
    wolprep scrape mwb --article-url URL
    wolprep solve w article.json
    cat talk.json | wolprep solve mwb
    wolprep info
"""

import argparse
import sys
from urllib.parse import urlparse

PUBLICATIONS = ("w", "bt", "mwb")
SOLVERS = ("w", "mwb", "nwtsty")


def parse_article_url(value: str) -> str:
    """argparse type: an absolute URL on the WOL host."""
    from wolprep.config import WOL_DOMAIN

    url = urlparse(value)
    if url.scheme not in ("http", "https") or url.hostname != WOL_DOMAIN:
        raise argparse.ArgumentTypeError(f"Not a valid {WOL_DOMAIN} URL: {value}")
    return value


def _artifact_title(pub: str, record) -> tuple:
    if pub == "w":
        return record.article_num, record.title
    if pub == "bt":
        return record.chapter_num, record.title
    return record.period, record.title


def cmd_scrape(args):
    """Scrape one publication into a JSON file."""
    import logging
    from wolprep.config import RUNS_DIR, RUN_FOLDERS
    from wolprep.runs import create_runs_dir, create_run_dir, artifact_name, write_json
    from wolprep.scraping.browser import open_browser, load_article, TooltipSurface
    from wolprep.scraping.citations import CiteCounter
    from wolprep.scraping.references import ReferenceClient
    from wolprep.scraping.publications import (
        extract_study_article, extract_book_chapter, extract_speech_material, to_json,
        incomplete_containers,
    )

    log = logging.getLogger("wolprep.scrape")
    if args.pub != "w" and not args.article_url:
        print(f"ERROR: --article-url is required for '{args.pub}'.")
        sys.exit(1)

    extractors = {
        "w": extract_study_article,
        "bt": extract_book_chapter,
        "mwb": extract_speech_material,
    }

    log.info("program started")
    counter = CiteCounter()
    fetch_reference = ReferenceClient()
    with open_browser(debug=args.debug) as page:
        load_article(page, args.article_url)
        surface = TooltipSurface(page)
        record = extractors[args.pub](page, surface, counter, fetch_reference)

    runs_dir = create_runs_dir(f"{RUNS_DIR}/{RUN_FOLDERS['scrape_' + args.pub]}")
    run_dir = create_run_dir(runs_dir)
    path = write_json(run_dir, artifact_name(*_artifact_title(args.pub, record)), to_json(record))
    print(f"Scrape result written to: {path}")
    print(f"  Citations numbered: {counter.last}")
    incomplete = incomplete_containers(record)
    if incomplete:
        print(f"  Incomplete containers: {incomplete} (partial citations kept, see log)")
    log.info("program finished")


def cmd_solve(args):
    """Run the LLM helpers over a scraped JSON file (or piped stdin)."""
    import logging
    from wolprep.config import RUNS_DIR, RUN_FOLDERS
    from wolprep.runs import (
        create_runs_dir, create_run_dir, read_json_input, write_json, write_text,
    )
    from wolprep.generation.llm import ChatClient
    from wolprep.rendering import markdown

    log = logging.getLogger("wolprep.solve")
    log.info("program started")
    data = read_json_input(args.input)
    llm = ChatClient()

    runs_dir = create_runs_dir(f"{RUNS_DIR}/{RUN_FOLDERS['solve_' + args.pub]}")
    run_dir = create_run_dir(runs_dir)

    if args.pub == "w":
        from wolprep.generation.solve_w import generate_ai_results
        results = generate_ai_results(llm, data)
        write_json(run_dir, "ai_results.json", results)
        path = write_text(run_dir, "result.md", markdown.render_study_answers(data, results))
    elif args.pub == "mwb":
        from wolprep.generation.solve_mwb import generate_ai_results
        results = generate_ai_results(llm, data)
        write_json(run_dir, "ai_results.json", results)
        path = write_text(run_dir, "result.md", markdown.render_speech_intros(data, results))
    else:
        from wolprep.generation.solve_nwtsty import generate_ai_results
        results = generate_ai_results(llm, data)
        write_json(run_dir, "ai_results.json", results)
        path = write_text(run_dir, "result.md", markdown.render_reference_study(results))
        write_text(run_dir, "meeting_comments.md", markdown.render_meeting_comments(results))
        write_text(run_dir, "meeting_comments_chat.md", markdown.render_meeting_comments_chat(results))

    print(f"Results written to: {run_dir}")
    print(f"  Markdown: {path}")
    log.info("program finished")


def cmd_info(args):
    """Print configuration."""
    from wolprep import __version__
    from wolprep.config import RUNS_DIR, RUN_FOLDERS, WOL_HOME_URL, MODEL, MODEL_STRONG, LOG_LEVEL

    print(f"wolprep v{__version__}")
    print(f"{'='*50}")
    print(f"\nPaths:")
    print(f"  Runs: {RUNS_DIR}")
    for key, folder in RUN_FOLDERS.items():
        print(f"    {key:<14} {folder}")
    print(f"\nSite:")
    print(f"  Home: {WOL_HOME_URL}")
    print(f"\nModels:")
    print(f"  Default: {MODEL}")
    print(f"  Strong:  {MODEL_STRONG}")
    print(f"\nLog level: {LOG_LEVEL}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="wolprep",
        description="wolprep: WOL publication scraper and study helper",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # wolprep scrape
    p_scrape = subparsers.add_parser("scrape", help="Scrape a publication from WOL")
    p_scrape.add_argument("pub", choices=PUBLICATIONS,
                          help="w: study article, bt: book chapter, mwb: workbook talk")
    p_scrape.add_argument("-u", "--article-url", type=parse_article_url, default=None,
                          help="URL of the page to scrape (default for w: this week's article)")
    p_scrape.add_argument("-d", "--debug", action="store_true",
                          help="Headed browser, slowed down, debug logging")
    p_scrape.set_defaults(func=cmd_scrape)

    # wolprep solve
    p_solve = subparsers.add_parser("solve", help="Generate answers for scraped JSON")
    p_solve.add_argument("pub", choices=SOLVERS)
    p_solve.add_argument("input", nargs="?", default=None,
                         help="JSON file to process (default: read from stdin)")
    p_solve.add_argument("-d", "--debug", action="store_true", help="Debug logging")
    p_solve.set_defaults(func=cmd_solve)

    # wolprep info
    p_info = subparsers.add_parser("info", help="Show configuration")
    p_info.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    from wolprep.errors import WolprepError
    from wolprep.logs import setup_logging

    setup_logging(debug=getattr(args, "debug", False))
    try:
        args.func(args)
    except WolprepError as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
