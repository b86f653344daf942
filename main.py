import argparse
import logging
import sys

from app.core.config import API_URL, HOST, LOG_LEVEL, PORT


def serve(args):
    import uvicorn

    uvicorn.run("app.main:create_app", factory=True, host=args.host, port=args.port, log_level=LOG_LEVEL.lower())


def desktop(args):
    from desktop.main import main as run_desktop

    return run_desktop(args.api_url)


def init_db(args):
    from app.db.init_db import init_db as create_tables

    create_tables(seed=not args.no_seed)


def build_parser():
    parser = argparse.ArgumentParser(prog="noctoon", description="Noctoon manga reader")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("desktop", help="open the desktop reader (default)")
    p.add_argument("--api-url", default=API_URL)
    p.set_defaults(func=desktop)

    p = sub.add_parser("serve", help="run the HTTP API")
    p.add_argument("--host", default=HOST)
    p.add_argument("--port", type=int, default=PORT)
    p.set_defaults(func=serve)

    p = sub.add_parser("init-db", help="create the sqlite tables")
    p.add_argument("--no-seed", action="store_true", help="skip the demo catalog")
    p.set_defaults(func=init_db)

    return parser


def main(argv=None):
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    if not getattr(args, "func", None):
        args = build_parser().parse_args(["desktop"])
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
