import argparse
import uvicorn
from app.core.config import settings

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"Run the {settings.PROJECT_NAME} server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (always on when DEBUG is set)")
    parser.add_argument(
        "--log-level",
        default="debug" if settings.DEBUG else "info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Uvicorn log level",
    )
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    use_reload = args.reload or settings.DEBUG

    if settings.DEBUG:
        print(f"{settings.PROJECT_NAME} ({settings.ENVIRONMENT}) on http://{args.host}:{args.port}, docs at /docs")

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=use_reload,
        log_level=args.log_level,
    )

if __name__ == "__main__":
    main()
