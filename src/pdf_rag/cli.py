"""Command-line entry point.

Usage
-----
    pdf-rag setup [--document documents/sample.pdf]
    pdf-rag query "What is this document about?"
    pdf-rag serve [--host 127.0.0.1] [--port 8000]
"""

from __future__ import annotations

import argparse
import sys

from pdf_rag.config import settings
from pdf_rag.logging_config import configure_logging
from pdf_rag.results import QueryStatus


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdf-rag", description="PDF retrieval-augmented QA")
    sub = parser.add_subparsers(dest="command", required=True)

    setup = sub.add_parser("setup", help="Provision the index and ingest a PDF")
    setup.add_argument(
        "--document",
        default=settings.document_path,
        help="PDF to ingest (default: %(default)s)",
    )

    query = sub.add_parser("query", help="Ask a question against the index")
    query.add_argument("question", help="Natural-language question")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("pdf_rag.serving.app:app", host=args.host, port=args.port)
        return 0

    from pdf_rag.service import RAGService

    with RAGService.from_settings(settings) as service:
        if args.command == "setup":
            report = service.setup(args.document)
            print(report.model_dump_json(indent=2))
            return 0 if report.ok else 1

        result = service.answer(args.question)
        if result.status is QueryStatus.ANSWERED:
            print(result.answer)
            return 0
        if result.status is QueryStatus.NO_MATCHES:
            print("No matching chunks found.", file=sys.stderr)
            return 0
        print(f"Query failed during {result.stage}: {result.error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
