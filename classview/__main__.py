import argparse
import asyncio
import logging
import sys

from .core.ast_parser import scan_java_files
from .core.resolver import ParseFailure
from .setting import get_settings


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classview",
        description="classview - Java inheritance-chain class diagrams",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default from settings)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a classview YAML config file"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Write the diagram for one .java file")
    gen.add_argument("file", help="Java source file")
    gen.add_argument("--output-dir", default=None, help="Output directory override")
    gen.add_argument("--no-svg", action="store_true", help="Skip SVG rendering")

    scan = sub.add_parser("scan", help="Write diagrams for every .java file under a directory")
    scan.add_argument("directory", help="Root directory")
    scan.add_argument("--output-dir", default=None, help="Output directory override")
    scan.add_argument("--no-svg", action="store_true", help="Skip SVG rendering")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=9010, help="Port for the API server")
    return parser


async def _generate(service, files, output_dir, render_svg, qualified_names=False) -> int:
    failures = 0
    for path in files:
        try:
            result = await service.generate_for_file(
                path,
                output_dir=output_dir,
                render_svg=render_svg,
                qualified_names=qualified_names,
            )
        except (ParseFailure, FileNotFoundError) as e:
            logger.error(f"{path}: {e}")
            failures += 1
            continue
        print(f"  {result['class_name']}: {result['puml_path']}")
        if result["svg_path"]:
            print(f"  {result['class_name']}: {result['svg_path']}")
    return failures


def main(argv=None) -> int:
    """Main entry point for classview."""
    args = _build_parser().parse_args(argv)

    settings = get_settings(args.config)
    setup_logging(args.log_level or settings.log_level)

    from .core.diagrams import ClassDiagramService
    service = ClassDiagramService(settings)

    if args.command == "serve":
        import uvicorn
        from .api.app import create_app

        app = create_app(service)
        logger.info(f"Starting FastAPI server on http://{args.host}:{args.port}")
        uvicorn.run(app, host=args.host, port=args.port, log_level=(args.log_level or settings.log_level).lower())
        return 0

    render_svg = False if args.no_svg else None
    if args.command == "generate":
        files = [args.file]
    else:
        files = scan_java_files(args.directory)
        logger.info(f"Found {len(files)} Java file(s) under {args.directory}")

    # scan output files are keyed by qualified class name
    qualified = args.command == "scan"
    failures = asyncio.run(_generate(service, files, args.output_dir, render_svg, qualified))
    if failures:
        logger.warning(f"{failures} of {len(files)} file(s) failed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
