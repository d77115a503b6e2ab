"""CLI entry point for the propositional writing compiler."""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from propwrite.document import Document
from propwrite.errors import DocumentError
from propwrite.pipeline.chunker import chunk_source
from propwrite.pipeline.translator import translate_chunks
from propwrite.pipeline.assembler import assemble
from propwrite.render import load_template, render_page

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".propositional"


def run_pipeline(source: str, properties: dict[str, str] | None = None) -> dict:
    """Run the full compilation pipeline, return final state.

    `properties` are defaults for document properties; property tags in the
    source overwrite them.
    """
    state: dict = {"source": source, "properties": dict(properties or {})}

    state.update(chunk_source(state))
    state.update(translate_chunks(state))
    state.update(assemble(state))

    return state


def compile_document(source: str,
                     properties: dict[str, str] | None = None) -> Document:
    return run_pipeline(source, properties)["document"]


def compile_file(src_path: Path, out_dir: Path | None = None, *,
                 template: str | None = None, base_relative_url: str = "",
                 properties: dict[str, str] | None = None) -> Path:
    """Compile one source file to `<out_dir>/<stem>.html`."""
    logger.info("Processing source file %s", src_path)
    document = compile_document(src_path.read_text(encoding="utf-8"),
                                properties)

    out_path = (out_dir or src_path.parent) / src_path.with_suffix(".html").name
    template_text = load_template(src_path.parent, document, template)
    html = render_page(document, template_text, file_name=out_path.name,
                       base_relative_url=base_relative_url)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as fh:
        fh.write(html)
    logger.info("  wrote %s", out_path)
    return out_path


def _find_sources(paths: list[str]) -> list[tuple[Path, Path]]:
    """Expand directories to their *.propositional files.

    Each source comes with its directory relative to the searched root, so
    output trees mirror source trees.
    """
    found: list[tuple[Path, Path]] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for src in sorted(path.rglob(f"*{SOURCE_SUFFIX}")):
                found.append((src, src.parent.relative_to(path)))
        else:
            found.append((path, Path()))
    return found


def _parse_property(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name, value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compile propositional writing to HTML.")
    parser.add_argument("sources", nargs="+",
                        help="Source files, or directories to search for "
                             f"*{SOURCE_SUFFIX} files")
    parser.add_argument("--output", "-o",
                        default=os.getenv("PROPWRITE_OUTPUT_DIR"),
                        help="Output directory (default: beside each source)")
    parser.add_argument("--base-url", default=os.getenv("PROPWRITE_BASE_URL", ""),
                        help="Base relative URL passed to the page template")
    parser.add_argument("--template", default=os.getenv("PROPWRITE_TEMPLATE"),
                        help="Jinja2 page template, overriding the "
                             "document's template property")
    parser.add_argument("--property", "-p", action="append", default=[],
                        type=_parse_property, metavar="NAME=VALUE",
                        help="Default document property (repeatable)")
    parser.add_argument("--log-level",
                        default=os.getenv("PROPWRITE_LOG_LEVEL", "INFO"),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    properties = dict(args.property)
    output = Path(args.output) if args.output else None

    start = time.time()
    failures = 0
    sources = _find_sources(args.sources)
    for src_path, rel_dir in sources:
        if not src_path.exists():
            logger.error("File not found: %s", src_path)
            failures += 1
            continue
        try:
            compile_file(src_path, output / rel_dir if output else None,
                         template=args.template,
                         base_relative_url=args.base_url,
                         properties=properties)
        except DocumentError as exc:
            logger.error("%s: %s", src_path, exc)
            failures += 1
        except Exception:
            logger.exception("Compiling %s failed", src_path)
            failures += 1

    logger.info("Done: %d of %d files compiled (%.1fs)",
                len(sources) - failures, len(sources), time.time() - start)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
