"""
Floormap — run the floor-plan layout API.

The server is stateless: every request posts the full layout document to
one of the ``/api/...`` endpoints (snap preview, drop/move/resize/rotate/
scale/delete edits, mask painting, wall junctions, viewport fit and zoom)
and receives the resulting document back.

Usage:
    python -m floormap serve                       # http://127.0.0.1:8000
    python -m floormap serve --host 0.0.0.0 --port 3000

Environment:
    FLOORMAP_CORS_ORIGINS   comma-separated origins allowed to call the API
                            (default ``*``); also read from ``.env``.
"""

import logging
import sys

USAGE = "Usage: python -m floormap serve [--host HOST] [--port PORT]"


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd in ("-h", "--help"):
        print(__doc__.strip())
        return

    if cmd != "serve":
        print(f"Unknown command: {cmd}")
        print(USAGE)
        sys.exit(1)

    host = "127.0.0.1"
    port = 8000
    for i, a in enumerate(args):
        if a == "--port" and i + 1 < len(args):
            port = int(args[i + 1])
        elif a == "--host" and i + 1 < len(args):
            host = args[i + 1]

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from floormap.web.server import main as serve
    serve(host=host, port=port)


if __name__ == "__main__":
    main()
